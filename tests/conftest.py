import pytest

from kindle_fastboot.core.errors import FileLoadError


class DictFileLoader:
    """In-memory FileLoader that records every path it was asked for."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.loaded = []

    def load(self, path: str) -> bytes:
        self.loaded.append(path)
        if path not in self.files:
            raise FileLoadError(path, "no such file")
        return self.files[path]


@pytest.fixture
def loader():
    return DictFileLoader({
        "img.bin": b"\x00\x01\x02\x03\x04\x05\x06\x07",
        "uImage": b"K" * 32,
        "info.txt": b"require board=tequila|whitney\nreject version-bootloader=0.1\n",
        "bad.txt": b"require product=alpha\nnot a requirement\n",
    })
