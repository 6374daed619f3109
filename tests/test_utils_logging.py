# tests/test_utils_logging.py

import logging
import logging.handlers

from hmm_tblout.utility.utils import setup_logging


def test_setup_logging_handlers(tmp_path):
    log_file = setup_logging(
            log_dir=tmp_path,
            force=True,
            console=False,
            max_bytes=1_000,
            backup_count=1,
            )
    root = logging.getLogger()
    # one file handler only
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)
    # rollover works
    root.info("x" * 2_000) # exceed 1 kb
    root.info("after rollover")
    root.handlers[0].flush()
    assert log_file.exists()
    rotated = log_file.with_suffix(".log.1")
    assert rotated.exists()


# ──────────────────────────────────────────────────────────────
def test_console_handler_added(tmp_path):
    setup_logging(tmp_path, force=True, console=True)
    kinds = [type(h) for h in logging.getLogger().handlers]
    assert kinds == [logging.FileHandler, logging.StreamHandler]


# ──────────────────────────────────────────────────────────────
def test_configured_root_left_alone(tmp_path):
    """Without force an already configured root logger keeps its handlers."""
    setup_logging(tmp_path / "first", force=True, console=False)
    before = list(logging.getLogger().handlers)

    log_file = setup_logging(tmp_path / "second", console=False)

    assert logging.getLogger().handlers == before
    assert log_file == tmp_path / "second" / "hmm_tblout.log"
    assert not log_file.exists()


# ──────────────────────────────────────────────────────────────
def test_same_prefix_appends(tmp_path):
    f1 = setup_logging(tmp_path, force=True, console=False)
    logging.info("first run")
    f2 = setup_logging(tmp_path, force=True, console=False)
    logging.info("second run")
    for h in logging.getLogger().handlers:
        h.flush()

    assert f1 == f2
    text = f1.read_text()
    assert "first run" in text and "second run" in text


def test_parser_messages_reach_log_file(tmp_path):
    from hmm_tblout import Reader

    log_file = setup_logging(tmp_path, force=True, console=False, level=logging.DEBUG)
    list(Reader(["seqA - m - 1 100 + 10 110 5 115 500 1e-5 5.0 0.1"], name="inline"))
    for h in logging.getLogger().handlers:
        h.flush()
    text = log_file.read_text()
    assert "inline: reading nhmmer table" in text
