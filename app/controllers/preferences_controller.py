from app.app_state import app_state
from core import catalog


def resolve_menu_position(narrow, preference, override=None):
    """Narrow layouts always use the side menu; otherwise override, then preference."""
    if narrow:
        return "side"
    if override in catalog.MENU_POSITIONS:
        return override
    if preference in catalog.MENU_POSITIONS:
        return preference
    return catalog.DEFAULT_MENU_POSITION


class PreferencesController:
    def menu_position(self, narrow):
        """Mutates: none. Returns: "side" | "top"."""
        preference = None
        if app_state.current_user_id:
            preference = catalog.get_menu_position(app_state.current_user_id)
        return resolve_menu_position(narrow, preference, app_state.menu_position_override)

    def set_menu_position(self, position):
        """Mutates: user preference. Does NOT mutate: menu_position_override. Returns: (bool, str)."""
        if not app_state.current_user_id:
            return False, "No user selected."
        return catalog.set_menu_position(app_state.current_user_id, position)

    def set_override(self, position):
        """Mutates: menu_position_override. Returns: (bool, str)."""
        if position is not None and position not in catalog.MENU_POSITIONS:
            return False, "Menu position must be 'side' or 'top'."
        app_state.menu_position_override = position
        return True, "Menu position override updated."

    def toggle_menu_position(self, narrow):
        """Mutates: user preference, menu_position_override (cleared). Returns: (bool, str)."""
        target = "side" if self.menu_position(narrow) == "top" else "top"
        success, message = self.set_menu_position(target)
        if success:
            app_state.menu_position_override = None
        return success, message
