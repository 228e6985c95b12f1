"""Console logging utilities for the octet8 emulator.

This module provides a small levelled console logger plus an emulator
specific logger that traces executed instructions and reports machine
faults together with a snapshot of the CPU state.
"""

import time
import sys

from octet8.decode import Instruction
from octet8.state import EmulatorState


class ConsoleLogger:
    """Flexible console logger with levels, colors and timestamps."""

    def __init__(
        self,
        name: str = "octet8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order.keys())}"
            )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


def format_state(state: EmulatorState) -> str:
    """One-line summary of the CPU registers, stack and timers."""
    registers = " ".join(f"{int(v):02X}" for v in state.V)
    pointer = int(state.stack.pointer)
    stack = " ".join(f"{int(a):03X}" for a in state.stack.data[:pointer])
    return (
        f"pc=0x{int(state.pc):03X} I=0x{int(state.I):03X} V=[{registers}] "
        f"stack=[{stack}] delay={int(state.delay_timer)} sound={int(state.sound_timer)}"
    )


class EmulatorLogger(ConsoleLogger):
    """Logger for instruction traces and machine faults."""

    def log_rom_loaded(self, source: str, size: int):
        """Log a ROM copied into program memory."""
        self.info(f"Loaded {source} ({size} bytes)")

    def log_instruction(self, pc: int, opcode: int, instruction: Instruction):
        """Trace one executed instruction at DEBUG level."""
        if self._should_log("DEBUG"):
            self.debug(f"0x{pc:03X}: {opcode:04X} {instruction}")

    def log_fault(self, state: EmulatorState, opcode: int, error: Exception):
        """Report a fatal machine fault with the state it happened in."""
        self.error(f"{type(error).__name__} at opcode {opcode:04X}: {error}")
        self.error(format_state(state))


default_logger = EmulatorLogger(log_level="WARNING")
