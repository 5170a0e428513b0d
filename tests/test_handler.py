"""Tests for the logging.Handler front end."""

import logging

import pytest

from dupfilter.handler import MultiDupFilterHandler


class CollectingHandler(logging.Handler):
    def __init__(self, level=logging.NOTSET):
        super().__init__(level)
        self.records: list[logging.LogRecord] = []
        self.flushed = 0

    def emit(self, record):
        self.records.append(record)

    def flush(self):
        self.flushed += 1

    @property
    def messages(self) -> list[str]:
        return [r.getMessage() for r in self.records]


@pytest.fixture()
def target():
    return CollectingHandler()


@pytest.fixture()
def app_logger(target):
    handler = MultiDupFilterHandler(max_period=10, targets=[target])
    logger = logging.getLogger("test_handler.app")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    yield logger
    logger.removeHandler(handler)
    handler.close()


class TestHandler:
    def test_hello_scenario(self, app_logger, target):
        for _ in range(10):
            app_logger.info("Hello1")
            app_logger.info("Hello2")
            app_logger.info("Hello3")
        app_logger.info("Different Hello")

        assert target.messages[:6] == ["Hello1", "Hello2", "Hello3"] * 2
        assert target.messages[6].startswith("Skipped 24 duplicate messages with step 3 from ")
        assert target.messages[7] == "Different Hello"
        assert len(target.records) == 8

    def test_original_record_passed_through(self, app_logger, target):
        app_logger.warning("user %s logged in", "ana", extra={"request_id": "r-1"})
        assert target.records[0].request_id == "r-1"
        assert target.records[0].args == ("ana",)

    def test_summary_uses_notification_level(self, target):
        handler = MultiDupFilterHandler(max_period=2, notification_level="warning", targets=[target])
        logger = logging.getLogger("test_handler.level")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            for msg in ["x", "x", "x", "y"]:
                logger.info(msg)
        finally:
            logger.removeHandler(handler)

        summary = target.records[2]
        assert summary.levelno == logging.WARNING
        assert summary.name == "test_handler.level"

    def test_target_level_respected(self):
        errors_only = CollectingHandler(level=logging.ERROR)
        handler = MultiDupFilterHandler(targets=[errors_only])
        logger = logging.getLogger("test_handler.targets")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            logger.info("chatty")
            logger.error("boom")
        finally:
            logger.removeHandler(handler)
        assert errors_only.messages == ["boom"]

    def test_close_reports_pending_run(self, target):
        handler = MultiDupFilterHandler(max_period=2, targets=[target])
        logger = logging.getLogger("test_handler.close")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        for _ in range(5):
            logger.info("tick")
        logger.removeHandler(handler)
        handler.close()

        assert target.messages[:2] == ["tick", "tick"]
        assert target.messages[2].startswith("Skipped 3 duplicate messages with step 1")
        assert target.flushed >= 1

    def test_own_diagnostics_ignored(self, target):
        handler = MultiDupFilterHandler(targets=[target])
        record = logging.LogRecord("dupfilter.filter", logging.DEBUG, __file__, 1, "internal", None, None)
        handler.handle(record)
        assert target.records == []

    def test_add_remove_target(self, target):
        other = CollectingHandler()
        handler = MultiDupFilterHandler(targets=[target])
        handler.add_target(other)
        assert handler.targets == (target, other)
        handler.remove_target(target)
        handler.remove_target(target)
        assert handler.targets == (other,)


class NoticingHandler(CollectingHandler):
    """Logs back into the app logger whenever it sees a summary."""

    def emit(self, record):
        super().emit(record)
        if record.getMessage().startswith("Skipped "):
            logging.getLogger(record.name).info("noticed")


class FailingHandler(logging.Handler):
    def emit(self, record):
        if record.getMessage() == "boom":
            raise OSError("target unavailable")


class TestHandlerErrors:
    def test_nested_logging_keeps_outer_record(self):
        target = NoticingHandler()
        handler = MultiDupFilterHandler(max_period=2, targets=[target])
        logger = logging.getLogger("test_handler.nested")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            for msg in ["x", "x", "x"]:
                logger.info(msg)
            logger.info("y", extra={"request_id": "r-9"})
        finally:
            logger.removeHandler(handler)

        assert target.messages[3:] == ["noticed", "y"]
        assert target.records[2].getMessage().startswith("Skipped 1 duplicate")
        assert target.records[4].request_id == "r-9"

    def test_failing_target_goes_to_handle_error(self, monkeypatch):
        monkeypatch.setattr(logging, "raiseExceptions", False)
        collector = CollectingHandler()
        handler = MultiDupFilterHandler(targets=[FailingHandler(), collector])
        errors = []
        monkeypatch.setattr(handler, "handleError", errors.append)
        logger = logging.getLogger("test_handler.failing")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            logger.info("boom")
            logger.info("ok")
        finally:
            logger.removeHandler(handler)

        assert [r.getMessage() for r in errors] == ["boom"]
        assert collector.messages == ["ok"]
        snap = handler.filter_core.metrics.snapshot()
        assert snap["received"] == 2
        assert snap["forwarded"] == 2
        assert handler.filter_core.state.active is False
