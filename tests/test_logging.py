"""Tests for console logging."""

import pytest
from octet8 import ConsoleLogger, EmulatorLogger, format_state
from octet8.decode import decode
from conftest import run_opcode


def quiet_logger(level):
    return EmulatorLogger(log_level=level, use_colors=False, show_timestamps=False)


def test_log_level_filtering(capsys):
    logger = ConsoleLogger(name="test", log_level="WARNING", use_colors=False, show_timestamps=False)

    logger.info("hidden")
    logger.warning("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[ WARNING][test] shown" in out


def test_unknown_log_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        ConsoleLogger(log_level="LOUD")


def test_instruction_trace_only_at_debug(capsys):
    quiet_logger("INFO").log_instruction(0x200, 0x6005, decode(0x6005))
    assert capsys.readouterr().out == ""

    quiet_logger("DEBUG").log_instruction(0x200, 0x6005, decode(0x6005))
    out = capsys.readouterr().out
    assert "0x200: 6005" in out
    assert "SetRegVal" in out


def test_rom_loaded_message(capsys):
    quiet_logger("INFO").log_rom_loaded("pong.ch8", 246)
    assert "Loaded pong.ch8 (246 bytes)" in capsys.readouterr().out


def test_format_state(fresh_state):
    state = run_opcode(fresh_state, 0x6A7F)
    state = run_opcode(state, 0x2300)

    summary = format_state(state)

    assert summary.startswith("pc=0x300 I=0x000")
    assert "00 00 00 00 00 00 00 00 00 00 7F" in summary
    assert "stack=[204]" in summary
    assert "delay=0 sound=0" in summary
