"""Client-side form state and submission for the three mentee forms."""

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel, ValidationError

from app.schemas.forms import DISCUSSION_TOPICS, FIELD_HINTS, FORM_MODELS, REQUIRED_FIELDS, empty_form_state

if TYPE_CHECKING:
    from app.client.api import PortalClient

logger = logging.getLogger("mentorhub.client")


class FormValidationError(ValueError):
    """Raised before any request is made; ``fields`` names the offending inputs."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.message = message
        self.fields = fields or []
        super().__init__(message)


class FormBusyError(RuntimeError):
    pass


def _lookup(state: dict[str, Any], path: str) -> Any:
    value: Any = state
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == []


def validate_form(kind: str, state: dict[str, Any]) -> BaseModel:
    missing = [path for path in REQUIRED_FIELDS[kind] if _is_blank(_lookup(state, path))]
    if missing:
        raise FormValidationError("All required fields must be filled", fields=missing)
    if kind == "interaction" and not state.get("discussionTopics"):
        raise FormValidationError("Please select at least one discussion topic", fields=["discussionTopics"])

    try:
        return FORM_MODELS[kind].model_validate(state)
    except ValidationError as e:
        loc = [str(part) for part in e.errors()[0]["loc"]]
        field = ".".join(loc)
        message = FIELD_HINTS.get(loc[0], f"Invalid value for {field}") if loc else "Invalid form data"
        raise FormValidationError(message, fields=[field]) from e


class FormCollector:
    """Holds one form's field state and sends it when it validates.

    On success the state is reset and ``on_complete`` is called with the
    server's reply. On failure the state is left untouched so it can be
    resubmitted.
    """

    def __init__(
        self,
        kind: str,
        client: "PortalClient",
        on_complete: Callable[[dict[str, Any]], None] | None = None,
    ):
        if kind not in FORM_MODELS:
            raise ValueError(f"Unknown form '{kind}'")
        self.kind = kind
        self.client = client
        self.on_complete = on_complete
        self.state = empty_form_state(kind)
        self.in_flight = False

    def set_field(self, name: str, value: Any) -> None:
        self.state[name] = value

    def set_nested(self, parent: str, name: str, value: Any) -> None:
        self.state[parent] = {**(self.state.get(parent) or {}), name: value}

    def toggle_topic(self, topic: str, checked: bool) -> None:
        if topic not in DISCUSSION_TOPICS:
            raise ValueError(f"Unknown discussion topic '{topic}'")
        topics = [t for t in self.state.get("discussionTopics", []) if t != topic]
        if checked:
            topics.append(topic)
        self.state["discussionTopics"] = topics

    def update(self, fields: dict[str, Any]) -> None:
        for name, value in fields.items():
            self.set_field(name, value)

    def reset(self) -> None:
        self.state = empty_form_state(self.kind)

    def validate(self) -> BaseModel:
        return validate_form(self.kind, self.state)

    def submit(self) -> dict[str, Any]:
        if self.in_flight:
            raise FormBusyError("A submission is already in progress")
        self.validate()

        self.in_flight = True
        try:
            result = self.client.submit_form(self.kind, copy.deepcopy(self.state))
        except Exception as e:
            logger.error(f"{self.kind} form submission error: {e}")
            raise
        finally:
            self.in_flight = False

        self.reset()
        if self.on_complete is not None:
            self.on_complete(result)
        return result
