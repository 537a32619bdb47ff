"""Tests for logging setup and atomic writes."""

import logging

import pytest

from orbitlab.io import atomic_write, setup_logging


class TestAtomicWrite:
    def test_writes_target(self, tmp_path):
        target = tmp_path / "out.bin"
        with atomic_write(target) as handle:
            handle.write(b"GIF89a")
        assert target.read_bytes() == b"GIF89a"
        assert [p.name for p in tmp_path.iterdir()] == ["out.bin"]

    def test_keeps_existing_file_on_error(self, tmp_path):
        target = tmp_path / "out.bin"
        target.write_bytes(b"old")
        with pytest.raises(RuntimeError):
            with atomic_write(target) as handle:
                handle.write(b"partial")
                raise RuntimeError("interrupted")
        assert target.read_bytes() == b"old"
        assert [p.name for p in tmp_path.iterdir()] == ["out.bin"]

    def test_text_mode(self, tmp_path):
        target = tmp_path / "sub" / "notes.txt"
        with atomic_write(target, mode="w") as handle:
            handle.write("hello")
        assert target.read_text() == "hello"


class TestSetupLogging:
    def test_file_handler(self, tmp_path):
        logger = setup_logging("DEBUG", log_dir=tmp_path / "logs")
        try:
            assert logger.name == "orbitlab"
            assert logging.getLogger().level == logging.DEBUG
            assert len(list((tmp_path / "logs").glob("orbitlab_*.log"))) == 1
        finally:
            for handler in logging.getLogger().handlers[:]:
                handler.close()
                logging.getLogger().removeHandler(handler)
