"""In-memory app state with persisted user selection."""

from core import storage

CURRENT_USER_KEY = "current_user"


class AppState:
    """Global shell state: current user and layout override. Frame state lives in the lifecycle manager."""

    def __init__(self):
        self.current_user_id = None
        self.menu_position_override = None

    def load(self):
        self.current_user_id = storage.get_app_state(CURRENT_USER_KEY)

    def set_current_user(self, user_id):
        self.current_user_id = user_id
        storage.set_app_state(CURRENT_USER_KEY, user_id)

app_state = AppState()
