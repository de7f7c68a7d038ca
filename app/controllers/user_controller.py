import logging

from app.app_state import app_state
from core import catalog, storage

DEFAULT_USERNAME = "default"


class UserController:
    def select_user(self, username):
        """Mutates: current_user_id. Does NOT mutate: menu_position_override. Returns: (bool, str)."""
        valid, message = catalog.validate_name(username, "Username")
        if not valid:
            return False, message
        app_state.set_current_user(catalog.ensure_user(username))
        return True, f"Signed in as {username.strip()}."

    def restore_user(self):
        """Mutates: current_user_id. Returns: (bool, str). Falls back to the default user."""
        app_state.load()
        if app_state.current_user_id and storage.get_user(app_state.current_user_id):
            return True, "User restored."
        return self.select_user(DEFAULT_USERNAME)

    def import_catalog(self, path):
        """Mutates: catalog tables. Does NOT mutate: app_state. Returns: (bool, str)."""
        if not app_state.current_user_id:
            return False, "No user selected."
        try:
            return catalog.import_catalog(path, app_state.current_user_id)
        except catalog.InvalidCatalogFile as exc:
            logging.warning("[CATALOG] rejected %s: %s", path, exc)
            return False, str(exc)
