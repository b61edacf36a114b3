"""
Logging configuration for the playqueue core using eliot.

Queue mutations, history appends and library lookups are emitted as eliot
messages so that a host application can route them to stdout, a JSON log file,
or both.
"""

import eliot
import logging
import sys
from eliot import log_message, write_traceback
from eliot.stdlib import EliotHandler
from pathlib import Path
from playqueue import config


class HumanReadableDestination:
    """Destination that formats eliot messages as single readable lines."""

    # Emitted on every mutation; useful in the JSON log, noisy on a terminal
    skip_messages = {
        "queue_operation",
        "history_append",
    }

    def __init__(self, file):
        self.file = file

    def __call__(self, message):
        # Internal action start/finish messages carry no message_type
        if message.get("action_type") and not message.get("message_type"):
            return

        msg_type = message.get("message_type", "")
        if msg_type in self.skip_messages:
            return

        if msg_type == "queue_index_error":
            output = (
                f"[QUEUE] {message.get('operation')}: index {message.get('index')} "
                f"out of range for queue of {message.get('size')}"
            )
        elif msg_type == "track_not_found":
            output = f"[LIBRARY] track {message.get('track_id')} not found"
        elif msg_type == "error_occurred":
            output = f"[ERROR] {message.get('error_type')}: {message.get('error_message')}"
        elif "description" in message:
            output = message["description"]
        elif "message" in message:
            output = message["message"]
        else:
            return

        if output and output.strip():
            self.file.write(output + "\n")
            self.file.flush()


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Set up eliot logging.

    Args:
        log_level: Logging level for the stdlib bridge (DEBUG, INFO, WARNING, ...);
            defaults to PLAYQUEUE_LOG_LEVEL
        log_file: Optional file path for raw JSON logs (stdout is always used);
            defaults to PLAYQUEUE_LOG_FILE
    """
    log_level = log_level or config.LOG_LEVEL
    log_file = log_file or config.LOG_FILE

    eliot.add_destination(HumanReadableDestination(sys.stdout))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        eliot.to_file(open(log_path, "a"))

    # Route stdlib logging through eliot
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.addHandler(EliotHandler())

    log_message(
        message_type="logging_setup", log_level=log_level, log_file=log_file or "stdout", message="Eliot logging configured"
    )


def log_queue_operation(operation: str, **context):
    """
    Log queue operations with context.

    Args:
        operation: Queue operation (enqueue, remove, reorder, shuffle, etc.)
        **context: Additional context data
    """
    log_message(message_type="queue_operation", operation=operation, **context)


def log_queue_index_error(operation: str, index: int, size: int):
    """Log a rejected mutator call."""
    log_message(message_type="queue_index_error", operation=operation, index=index, size=size)


def log_history_append(track_id, history_size: int):
    log_message(message_type="history_append", track_id=track_id, history_size=history_size)


def log_library_lookup(track_id, found: bool, **context):
    """
    Log a library lookup performed by the track resolver.

    Args:
        track_id: Identity of the queued track
        found: Whether the library still knows the track
        **context: Additional context data
    """
    if found:
        log_message(message_type="library_lookup", track_id=track_id, **context)
    else:
        log_message(message_type="track_not_found", track_id=track_id, **context)


def log_error(error: Exception, **context):
    """
    Log errors with full context and traceback.

    Args:
        error: Exception that occurred
        **context: Additional context data
    """
    write_traceback(exc_info=sys.exc_info())
    log_message(message_type="error_occurred", error_message=str(error), error_type=type(error).__name__, **context)
