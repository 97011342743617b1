"""Encoding of dispatch outcomes into redirect signals and back into notices."""

import html
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import SplitResult, parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

import structlog

from ..actions.base import DispatchOutcome
from ..actions.identifiers import parse_int


logger = structlog.get_logger(__name__)

DONE_FIELD = "bulk_action_done"
COUNT_FIELD = "bulk_action_count"
ERROR_FIELD = "bulk_action_error"
MESSAGE_FIELD = "bulk_action_message"

SIGNAL_FIELDS = (DONE_FIELD, COUNT_FIELD, ERROR_FIELD, MESSAGE_FIELD)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9_\-]")


@dataclass(frozen=True)
class Notice:
    """A dismissible admin notice."""

    css_class: str
    text: str

    @property
    def is_error(self) -> bool:
        return self.css_class == "error"

    def to_html(self) -> str:
        """Render the notice markup with escaped text."""
        return '<div class="notice notice-{0} is-dismissible"><p>{1}</p></div>'.format(
            html.escape(self.css_class, quote=True),
            html.escape(self.text, quote=False),
        )


def _split_query(target: str) -> Tuple[SplitResult, List[Tuple[str, str]]]:
    parts = urlsplit(target)
    return parts, parse_qsl(parts.query, keep_blank_values=True)


def strip_signal(target: str) -> str:
    """Remove any signal fields from a redirect target."""
    parts, query = _split_query(target)
    kept = [(k, v) for k, v in query if k not in SIGNAL_FIELDS]
    if len(kept) == len(query):
        return target
    return urlunsplit(parts._replace(query=urlencode(kept, quote_via=quote_plus)))


def encode(outcome: DispatchOutcome, target: str) -> str:
    """Attach an outcome to a redirect target as query fields.

    Unhandled outcomes return the target untouched.

    Args:
        outcome: Dispatch outcome
        target: Redirect URL

    Returns:
        Redirect URL carrying the signal
    """
    if not outcome.is_handled:
        return target

    parts, query = _split_query(target)
    query = [(k, v) for k, v in query if k not in SIGNAL_FIELDS]

    if outcome.message:
        query.append((MESSAGE_FIELD, outcome.message))
    if outcome.error:
        query.append((ERROR_FIELD, "1"))
    query.append((COUNT_FIELD, str(max(outcome.count, 0))))
    query.append((DONE_FIELD, outcome.action or ""))

    return urlunsplit(parts._replace(query=urlencode(query, quote_via=quote_plus)))


def sanitize_key(value: Any) -> str:
    """Lowercase a key and drop everything but [a-z0-9_-]."""
    return _UNSAFE_KEY_CHARS.sub("", str(value).lower())


def default_message(count: int) -> str:
    """Pluralized fallback text for a processed count."""
    if count == 1:
        return "1 item processed."
    return f"{count} items processed."


def _first(value: Any) -> Any:
    # parse_qs style multi-value fields
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def decode(
    signal: Union[str, Mapping[str, Any]],
    actions: Mapping[str, Any],
) -> Optional[Notice]:
    """Turn an incoming signal into a notice.

    Args:
        signal: Query fields of the current request, or the full URL
        actions: Actions currently registered for the scope

    Returns:
        Notice, or None if the signal is absent or names a foreign action
    """
    if isinstance(signal, str):
        fields: Dict[str, Any] = dict(_split_query(signal)[1])
    else:
        fields = {k: _first(v) for k, v in signal.items()}

    done = fields.get(DONE_FIELD)
    if not done:
        return None

    action_key = str(done) if done in actions else sanitize_key(done)
    if action_key not in actions:
        logger.debug("Ignoring signal for unregistered bulk action", action=action_key)
        return None

    count = abs(parse_int(fields.get(COUNT_FIELD)) or 0)
    is_error = ERROR_FIELD in fields

    message = fields.get(MESSAGE_FIELD)
    if not message:
        message = default_message(count)

    return Notice(css_class="error" if is_error else "success", text=str(message))
