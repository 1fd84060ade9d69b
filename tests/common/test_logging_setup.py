from __future__ import annotations

import logging

from common.logging import setup_default_logging


def test_pil_logger_is_kept_at_info_or_above():
    pil = logging.getLogger("PIL")
    before = pil.level
    try:
        setup_default_logging("DEBUG")
        assert pil.level == logging.INFO
        setup_default_logging(logging.WARNING)
        assert pil.level == logging.WARNING
    finally:
        pil.setLevel(before)


def test_unknown_level_name_falls_back_to_info():
    pil = logging.getLogger("PIL")
    before = pil.level
    try:
        setup_default_logging("chatty")
        assert pil.level == logging.INFO
    finally:
        pil.setLevel(before)
