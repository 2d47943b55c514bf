"""
Command-line scanner.

Walks the argument tokens left to right and turns them into a queue of
device operations:

    -s <serial>                  select device by serial number
    -i <vendor id>               also accept a custom USB vendor id
    getvar <variable>
    setvar <variable> <value>
    download <filename>
    verify <partition> [ <filename> ]
    flash <partition> [ <filename> ]
    boot [ <filename> ]
    erase <partition>
    check <partition>
    eraseall | continue | reboot | powerdown | pass | fail
    requirements <filename>
    oem <anything...>
    devices                      (first token only)

Any error aborts the scan; the partially built queue is dropped and never
returned.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .config import DeviceFilterContext
from .errors import InvalidOption, UsageError
from .loader import FileLoader, PathFileLoader
from .oem import queue_oem_command
from .parsing import parse_vendor_id
from .queue import CommandQueue
from .requirements import parse_requirements
from .results import ScanResult

logger = logging.getLogger(__name__)

# Commands that take no arguments and map to a plain bootloader command
SIMPLE_COMMANDS: Dict[str, str] = {
    "eraseall": "wiping the flash memory",
    "continue": "resuming boot",
    "powerdown": "shutting down",
    "pass": "turning on led",
    "fail": "turning on led",
}

# Partition name used by a bare "download <filename>"
DOWNLOAD_PARTITION = "data"


@dataclass(frozen=True)
class CommandSpec:
    """
    Arity rule for one command.

    Attributes:
        name: Command keyword
        required: Tokens required after the keyword
        optional_file: Whether one more token is taken as a filename
        usage: Short usage line for diagnostics
    """
    name: str
    required: int
    optional_file: bool = False
    usage: str = ""


COMMANDS: Dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        CommandSpec("getvar", 1, usage="getvar <variable>"),
        CommandSpec("setvar", 2, usage="setvar <variable> <value>"),
        CommandSpec("download", 1, usage="download <filename>"),
        CommandSpec("verify", 1, optional_file=True, usage="verify <partition> [ <filename> ]"),
        CommandSpec("flash", 1, optional_file=True, usage="flash <partition> [ <filename> ]"),
        CommandSpec("boot", 0, optional_file=True, usage="boot [ <filename> ]"),
        CommandSpec("erase", 1, usage="erase <partition>"),
        CommandSpec("check", 1, usage="check <partition>"),
        CommandSpec("requirements", 1, usage="requirements <filename>"),
        CommandSpec("reboot", 0, usage="reboot"),
        CommandSpec("oem", 0, usage="oem <command...>"),
        *(CommandSpec(name, 0, usage=name) for name in SIMPLE_COMMANDS),
    )
}


class ArgumentScanner:
    """
    Turns argv tokens into a ScanResult.

    A scanner holds no state between calls to scan(); each call builds its
    own queue and device filter.

    Example:
        scanner = ArgumentScanner()
        result = scanner.scan(["-s", "B0F1", "flash", "kernel", "uImage"])
    """

    def __init__(
        self,
        loader: Optional[FileLoader] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            loader: Source of file contents (default: local filesystem)
            environ: Environment for the default serial filter (default: os.environ)
        """
        self.loader = loader or PathFileLoader()
        self.environ = environ
        self._handlers: Dict[str, Callable[[CommandQueue, List[str], Optional[str]], None]] = {
            "getvar": self._getvar,
            "setvar": self._setvar,
            "download": self._download,
            "verify": self._verify,
            "flash": self._flash,
            "boot": self._boot,
            "erase": self._erase,
            "check": self._check,
            "requirements": self._requirements,
        }

    def scan(self, tokens: Sequence[str]) -> ScanResult:
        """
        Scan a complete command line.

        Args:
            tokens: Arguments after the program name

        Returns:
            ScanResult with a frozen queue.

        Raises:
            UsageError: Empty command line, unknown command, too few arguments
            InvalidOption: Bad -i value
            FileLoadError: A named file could not be read
            MalformedRequirement: A requirements file did not parse
        """
        tokens = list(tokens)
        if not tokens:
            raise UsageError("no command given")

        if tokens[0] == "devices":
            logger.debug("devices requested, skipping queue construction")
            return ScanResult(
                context=DeviceFilterContext.from_environment(self.environ),
                list_devices=True,
            )

        context = DeviceFilterContext.from_environment(self.environ)
        queue = CommandQueue()
        pos = 0

        while pos < len(tokens):
            token = tokens[pos]
            if token == "-s":
                self._require(tokens, pos, 1, "-s <serial number>")
                context = context.with_serial(tokens[pos + 1])
                pos += 2
            elif token == "-i":
                self._require(tokens, pos, 1, "-i <vendor id>")
                value = tokens[pos + 1]
                try:
                    vendor_id = parse_vendor_id(value)
                except ValueError as e:
                    raise InvalidOption("-i", value, str(e))
                context = context.with_vendor_id(vendor_id)
                pos += 2
            else:
                pos = self._scan_command(tokens, pos, queue)

        operations = queue.freeze()
        logger.debug(f"Scan complete: {len(operations)} operation(s)")
        return ScanResult(operations=operations, context=context)

    def _require(self, tokens: List[str], pos: int, count: int, usage: str) -> None:
        if len(tokens) - pos - 1 < count:
            raise UsageError(f"{tokens[pos]} requires {count} argument(s): {usage}")

    def _scan_command(self, tokens: List[str], pos: int, queue: CommandQueue) -> int:
        """Handle the command at tokens[pos]; returns the next position."""
        name = tokens[pos]
        spec = COMMANDS.get(name)
        if spec is None:
            raise UsageError(f"unknown command '{name}'")

        self._require(tokens, pos, spec.required, spec.usage)
        args = tokens[pos + 1:pos + 1 + spec.required]
        next_pos = pos + 1 + spec.required

        filename = None
        if spec.optional_file and next_pos < len(tokens):
            filename = tokens[next_pos]
            next_pos += 1

        logger.debug(f"Command {name} args={args} file={filename}")

        if name == "oem":
            return next_pos + queue_oem_command(queue, tokens[next_pos:])

        handler = self._handlers.get(name)
        if handler is not None:
            handler(queue, args, filename)
        elif name == "reboot":
            queue.queue_reboot()
        else:
            queue.queue_command(name, SIMPLE_COMMANDS[name])
        return next_pos

    def _getvar(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        variable = args[0]
        queue.queue_command("getvar", variable, argument=variable)

    def _setvar(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        variable, value = args
        queue.queue_command("setvar", variable, argument=f"{variable} {value}")

    def _download(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        queue.queue_download(DOWNLOAD_PARTITION, self.loader.load(args[0]))

    def _load_for(self, queue: CommandQueue, partition: str, filename: Optional[str]) -> int:
        """Queue a Download for filename if given; return the size to expect."""
        if filename is None:
            return queue.last_download_size
        return queue.queue_download(partition, self.loader.load(filename)).size

    def _verify(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        partition = args[0]
        queue.queue_verify(partition, self._load_for(queue, partition, filename))

    def _flash(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        partition = args[0]
        queue.queue_flash(partition, self._load_for(queue, partition, filename))

    def _boot(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        if filename is not None:
            self._load_for(queue, "boot", filename)
        queue.queue_command("boot", "booting")

    def _erase(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        queue.queue_erase(args[0])

    def _check(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        queue.queue_check(args[0])

    def _requirements(self, queue: CommandQueue, args: List[str], filename: Optional[str]) -> None:
        for requirement in parse_requirements(self.loader.load(args[0])):
            queue.queue_requirement(requirement)

