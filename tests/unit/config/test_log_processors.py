"""Unit tests for structlog processors."""

from oficina.config.logging import MASK, app_context, mask_credentials


class TestMaskCredentials:
    def test_masks_credential_fields(self):
        event = {
            "event": "login_failed",
            "name": "gerente",
            "password": "hunter2",
            "authorization": "Bearer abc.def.ghi",
        }

        result = mask_credentials(None, "warning", event)

        assert result["password"] == MASK
        assert result["authorization"] == MASK
        assert result["name"] == "gerente"

    def test_leaves_empty_values(self):
        result = mask_credentials(None, "info", {"event": "x", "token": None})
        assert result["token"] is None


class TestAppContext:
    def test_stamps_identity(self):
        add = app_context("oficina", "1.2.0", "production")

        result = add(None, "info", {"event": "x"})

        assert result["app"] == "oficina"
        assert result["version"] == "1.2.0"
        assert result["environment"] == "production"

    def test_bound_values_win(self):
        add = app_context("oficina", "1.2.0", "production")
        assert add(None, "info", {"event": "x", "app": "manage"})["app"] == "manage"
