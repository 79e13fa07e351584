"""Tests for the automation catalog."""

import pytest

from flowsim.core.automations import DEFAULT_ACTIONS, AutomationCatalog, default_catalog
from flowsim.core.exceptions import AutomationCatalogError, AutomationNotFoundError


class TestAutomationCatalog:
    """Test cases for AutomationCatalog."""

    def test_register_and_get(self):
        """Registered actions can be retrieved by id."""
        catalog = AutomationCatalog()
        catalog.register("send_email", "Send Email", ["to", "subject"])

        action = catalog.get_action("send_email")
        assert action is not None
        assert action.label == "Send Email"
        assert action.params == ["to", "subject"]
        assert catalog.action_exists("send_email")

    def test_list_keeps_registration_order(self):
        catalog = AutomationCatalog()
        catalog.register("b", "B")
        catalog.register("a", "A")

        assert [action.id for action in catalog.list_actions()] == ["b", "a"]

    def test_duplicate_registration(self):
        """Registering the same id twice raises and keeps the original."""
        catalog = AutomationCatalog()
        catalog.register("send_email", "Send Email")

        with pytest.raises(AutomationCatalogError):
            catalog.register("send_email", "Other")

        assert catalog.get_action("send_email").label == "Send Email"

    def test_blank_id(self):
        with pytest.raises(AutomationCatalogError):
            AutomationCatalog().register("  ", "Nothing")

    def test_require_missing_action(self):
        """Requiring an unknown id raises AutomationNotFoundError."""
        with pytest.raises(AutomationNotFoundError) as exc_info:
            AutomationCatalog().require_action("missing")

        assert exc_info.value.context["action_id"] == "missing"

    def test_default_catalog(self):
        """The default catalog holds the built-in actions."""
        catalog = default_catalog()

        assert len(catalog) == len(DEFAULT_ACTIONS)
        assert catalog.get_action("generate_doc").params == ["template", "recipient"]
