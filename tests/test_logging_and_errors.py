import logging

from core.errors import DialogueError, ErrorDetails, InvalidOperationError
from core.logging_config import LOGGER_NAME, get_logger, setup_logging
from rules.errors import EffectParseError


def test_setup_logging_returns_project_logger() -> None:
    logger = setup_logging(logging.DEBUG)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert get_logger("rules.effects").name == "dialogue.rules.effects"


def test_error_details_default_to_error_code() -> None:
    error = DialogueError("boom")
    assert error.code == "ERR_DIALOGUE"
    custom = DialogueError("boom", details=ErrorDetails(code="ERR_X", message="boom"))
    assert custom.code == "ERR_X"


def test_invalid_operation_message() -> None:
    error = InvalidOperationError("concatenate", "a", 1)
    assert str(error) == "cannot concatenate a and 1"
    assert error.operation == "concatenate"


def test_parse_error_is_value_error() -> None:
    error = EffectParseError("oops", "no operator")
    assert isinstance(error, ValueError)
    assert "oops" in str(error)
