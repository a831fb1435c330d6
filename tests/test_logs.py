import json
import logging

from campaign_flow.logs import JsonFormatter, configure_logging, get_logger


def test_json_formatter_includes_structured_fields():
    record = logging.LogRecord(
        name="campaign_flow.flow_builder",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="action appended",
        args=(),
        exc_info=None,
    )
    record.node_id = 6
    record.action = "message"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "info"
    assert payload["logger"] == "campaign_flow.flow_builder"
    assert payload["msg"] == "action appended"
    assert payload["node_id"] == 6
    assert payload["action"] == "message"
    assert "edge_id" not in payload


def test_handler_installed_once():
    get_logger("campaign_flow.a")
    get_logger("campaign_flow.b")
    assert len(logging.getLogger("campaign_flow").handlers) == 1


def test_configure_logging_sets_level():
    configure_logging("debug")
    assert logging.getLogger("campaign_flow").level == logging.DEBUG
    configure_logging("INFO")


def test_builder_logs_appends(builder, caplog):
    with caplog.at_level(logging.INFO, logger="campaign_flow"):
        builder.append_action("message")
    records = [record for record in caplog.records if record.getMessage() == "action appended"]
    assert records and records[0].action == "message"
