"""Catalog of automated actions available to `automated` nodes."""

from typing import Dict, List, Optional, Sequence

from ..models.core import AutomationAction
from .exceptions import AutomationCatalogError, AutomationNotFoundError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_ACTIONS = [
    ("send_email", "Send Email", ["to", "subject", "body"]),
    ("generate_doc", "Generate Document", ["template", "recipient"]),
    ("slack_notify", "Slack Notification", ["channel", "message"]),
    ("create_ticket", "Create Support Ticket", ["title", "priority", "assignee"]),
    ("update_crm", "Update CRM Record", ["recordId", "field", "value"]),
    ("schedule_meeting", "Schedule Meeting", ["attendees", "duration", "subject"]),
    ("webhook_call", "Call Webhook", ["url", "method", "payload"]),
    ("data_transform", "Transform Data", ["source", "transformation"]),
]


class AutomationCatalog:
    """Registry of automation actions, listed in registration order."""

    def __init__(self):
        self._actions: Dict[str, AutomationAction] = {}

    def register(self, action_id: str, label: str, params: Sequence[str] = ()) -> AutomationAction:
        """Register an automation action.

        Args:
            action_id: Unique identifier referenced by automated nodes
            label: Display label
            params: Names of the parameters the action requires

        Raises:
            AutomationCatalogError: If the id is blank or already registered
        """
        if not action_id or not action_id.strip():
            raise AutomationCatalogError("Automation action id cannot be empty", operation="register")

        action_id = action_id.strip()
        if action_id in self._actions:
            raise AutomationCatalogError(
                f"Automation action '{action_id}' is already registered",
                action_id=action_id,
                operation="register"
            )

        action = AutomationAction(id=action_id, label=label, params=list(params))
        self._actions[action_id] = action
        logger.debug(f"Registered automation action '{action_id}'")
        return action

    def list_actions(self) -> List[AutomationAction]:
        return list(self._actions.values())

    def get_action(self, action_id: str) -> Optional[AutomationAction]:
        return self._actions.get(action_id)

    def require_action(self, action_id: str) -> AutomationAction:
        """Return the action or raise AutomationNotFoundError."""
        action = self.get_action(action_id)
        if action is None:
            raise AutomationNotFoundError(action_id)
        return action

    def action_exists(self, action_id: str) -> bool:
        return action_id in self._actions

    def __len__(self) -> int:
        return len(self._actions)


def default_catalog() -> AutomationCatalog:
    """Create a catalog seeded with the built-in automation actions."""
    catalog = AutomationCatalog()
    for action_id, label, params in DEFAULT_ACTIONS:
        catalog.register(action_id, label, params)
    logger.info(f"Automation catalog initialized with {len(catalog)} actions")
    return catalog
