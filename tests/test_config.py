"""日志配置测试。"""
import logging

from pet_inventory.config import LOG_HANDLER_NAME, setup_logging


def test_setup_logging_installs_one_named_handler() -> None:
    root = logging.getLogger("pet_inventory")
    try:
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        named = [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]
        assert len(named) == 1
        assert root.level == logging.DEBUG
    finally:
        for h in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
            root.removeHandler(h)
        root.setLevel(logging.NOTSET)
