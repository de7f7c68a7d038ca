"""URL catalog management for the dashboard.

Design:
- SQLite stores users, URL groups, URLs and their ordered memberships.
- Helpers validate input and return (success, message) like the controllers.
- Url / UrlGroup are the read-only shapes handed to the frame lifecycle layer.
"""
from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from core import storage

MENU_POSITIONS = ("side", "top")
DEFAULT_MENU_POSITION = "top"
MAX_NAME_LENGTH = 100


class InvalidCatalogFile(ValueError):
    pass


@dataclass(frozen=True)
class Url:
    id: str
    title: str
    url: str
    url_mobile: str | None = None
    icon_path: str | None = None
    idle_timeout_minutes: int | None = None
    open_in_new_tab: bool = False
    is_localhost: bool = False
    port: str | None = None
    path: str | None = None
    localhost_mobile_port: str | None = None
    localhost_mobile_path: str | None = None
    display_order: int = 0

    @classmethod
    def from_record(cls, record: storage.UrlRecord, display_order: int = 0) -> "Url":
        return cls(
            id=record.id,
            title=record.title,
            url=record.url,
            url_mobile=record.url_mobile,
            icon_path=record.icon_path,
            idle_timeout_minutes=record.idle_timeout_minutes,
            open_in_new_tab=bool(record.open_in_new_tab),
            is_localhost=bool(record.is_localhost),
            port=record.port,
            path=record.path,
            localhost_mobile_port=record.localhost_mobile_port,
            localhost_mobile_path=record.localhost_mobile_path,
            display_order=display_order,
        )


@dataclass(frozen=True)
class UrlGroup:
    id: str
    name: str
    description: str | None = None
    urls: tuple[Url, ...] = field(default_factory=tuple)

    def contains(self, url_id: str) -> bool:
        return any(url.id == url_id for url in self.urls)


def effective_url(url: Url, is_mobile: bool, scheme: str = "http", hostname: str = "localhost") -> str:
    """Return the locator a frame should load for this device class."""
    if not url.is_localhost:
        return url.url_mobile if is_mobile and url.url_mobile else url.url

    use_mobile = is_mobile and bool(url.localhost_mobile_port or url.localhost_mobile_path)
    port = url.localhost_mobile_port if use_mobile and url.localhost_mobile_port else (url.port or "")
    path = url.localhost_mobile_path if use_mobile and url.localhost_mobile_path else (url.path or "/")
    if port:
        return f"{scheme}://{hostname}:{port}{path}"
    return f"{scheme}://{hostname}{path}"


def validate_name(name, label="Name"):
    """Validate a user, group or URL title."""
    if not isinstance(name, str) or not name.strip():
        return False, f"{label} cannot be empty."
    if len(name.strip()) > MAX_NAME_LENGTH:
        return False, f"{label} must be at most {MAX_NAME_LENGTH} characters."
    return True, ""


def validate_locator(locator):
    """Validate an absolute http(s) locator."""
    if not isinstance(locator, str) or not locator.strip():
        return False, "URL cannot be empty."
    parts = urlsplit(locator.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return False, "URL must start with http:// or https://"
    return True, ""


def create_user(username):
    """Create a user. Returns (success, message, user_id)."""
    valid, message = validate_name(username, "Username")
    if not valid:
        return False, message, None
    username = username.strip()
    if storage.get_user_by_name(username):
        return False, "A user with that name already exists.", None
    user_id = storage.create_user(username)
    return True, f"User '{username}' created.", user_id


def ensure_user(username):
    """Return the id of an existing user, creating it on first use."""
    existing = storage.get_user_by_name(username.strip())
    if existing:
        return existing.id
    _, _, user_id = create_user(username)
    return user_id


def create_group(name, description=None):
    """Create a URL group. Returns (success, message, group_id)."""
    valid, message = validate_name(name, "Group name")
    if not valid:
        return False, message, None
    name = name.strip()
    if storage.get_url_group_by_name(name):
        return False, "A group with that name already exists.", None
    group_id = storage.create_url_group(name, description)
    return True, f"Group '{name}' created.", group_id


def delete_group(group_id):
    if not storage.get_url_group(group_id):
        return False, "Group not found."
    storage.delete_url_group(group_id)
    return True, "Group deleted."


def create_url(title, locator, **fields):
    """Create a URL. Localhost URLs only need port/path. Returns (success, message, url_id)."""
    valid, message = validate_name(title, "Title")
    if not valid:
        return False, message, None
    if not fields.get("is_localhost"):
        valid, message = validate_locator(locator)
        if not valid:
            return False, message, None
        mobile = fields.get("url_mobile")
        if mobile:
            valid, message = validate_locator(mobile)
            if not valid:
                return False, f"Mobile {message}", None
    timeout = fields.get("idle_timeout_minutes")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0):
        return False, "Idle timeout must be a non-negative number of minutes.", None
    locator = locator.strip() if isinstance(locator, str) else ""
    url_id = storage.create_url(title.strip(), locator, **fields)
    return True, f"URL '{title.strip()}' created.", url_id


def add_url_to_group(group_id, url_id, display_order=None):
    if not storage.get_url_group(group_id):
        return False, "Group not found."
    if not storage.get_url(url_id):
        return False, "URL not found."
    storage.add_url_to_group(group_id, url_id, display_order)
    return True, "URL added to group."


def remove_url_from_group(group_id, url_id):
    if not storage.get_url_group(group_id):
        return False, "Group not found."
    storage.remove_url_from_group(group_id, url_id)
    return True, "URL removed from group."


def assign_group(user_id, group_id):
    if not storage.get_user(user_id):
        return False, "User not found."
    if not storage.get_url_group(group_id):
        return False, "Group not found."
    storage.assign_group_to_user(user_id, group_id)
    return True, "Group assigned."


def unassign_group(user_id, group_id):
    if not storage.get_user(user_id):
        return False, "User not found."
    storage.unassign_group_from_user(user_id, group_id)
    return True, "Group unassigned."


def list_url_groups_for_user(user_id) -> list[UrlGroup]:
    """Return the user's groups with their URLs in display order."""
    groups = []
    for record in storage.list_user_groups(user_id):
        urls = tuple(Url.from_record(url, order) for url, order in storage.list_group_urls(record.id))
        groups.append(UrlGroup(record.id, record.name, record.description, urls))
    return groups


def set_last_active_url(user_id, url_id):
    if not storage.get_url(url_id):
        return False, "URL not found."
    storage.update_user_fields(user_id, last_active_url_id=url_id)
    return True, "Last active URL updated."


def get_last_active_url(user_id):
    user = storage.get_user(user_id)
    return user.last_active_url_id if user else None


def get_menu_position(user_id):
    user = storage.get_user(user_id)
    if user and user.menu_position in MENU_POSITIONS:
        return user.menu_position
    return DEFAULT_MENU_POSITION


def set_menu_position(user_id, position):
    if position not in MENU_POSITIONS:
        return False, "Menu position must be 'side' or 'top'."
    if not storage.get_user(user_id):
        return False, "User not found."
    storage.update_user_fields(user_id, menu_position=position)
    return True, f"Menu position set to {position}."


def _load_catalog_file(path):
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidCatalogFile(f"Cannot read catalog file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidCatalogFile(f"Catalog file is not valid JSON: {exc}") from exc
    groups = data.get("groups") if isinstance(data, dict) else None
    if not isinstance(groups, list):
        raise InvalidCatalogFile("Catalog file must contain a 'groups' list.")
    for group in groups:
        if not isinstance(group, dict) or not isinstance(group.get("urls", []), list):
            raise InvalidCatalogFile("Each group must be an object with a 'urls' list.")
        if not all(isinstance(entry, dict) for entry in group.get("urls", [])):
            raise InvalidCatalogFile("Each URL entry must be an object.")
    return groups


_URL_FIELDS = (
    "url_mobile",
    "icon_path",
    "idle_timeout_minutes",
    "open_in_new_tab",
    "is_localhost",
    "port",
    "path",
    "localhost_mobile_port",
    "localhost_mobile_path",
)


def import_catalog(path, user_id):
    """
    Import groups and URLs from a JSON file and assign them to the user.
    Existing groups (by name) are reused. Returns (success, message).
    Raises InvalidCatalogFile when the file cannot be parsed.
    """
    groups = _load_catalog_file(path)
    imported_urls = 0
    skipped = []
    try:
        for group in groups:
            existing = storage.get_url_group_by_name(str(group.get("name", "")).strip())
            if existing:
                group_id = existing.id
            else:
                success, message, group_id = create_group(group.get("name", ""), group.get("description"))
                if not success:
                    skipped.append(message)
                    continue
            assign_group(user_id, group_id)
            for entry in group.get("urls", []):
                fields = {key: entry[key] for key in _URL_FIELDS if key in entry}
                success, message, url_id = create_url(entry.get("title", ""), entry.get("url", ""), **fields)
                if not success:
                    skipped.append(message)
                    continue
                storage.add_url_to_group(group_id, url_id, entry.get("display_order"))
                imported_urls += 1
    except sqlite3.Error as exc:
        return False, f"Catalog import failed: {exc}"
    message = f"Imported {imported_urls} URL(s) in {len(groups)} group(s)."
    if skipped:
        message += f" Skipped {len(skipped)} entr{'y' if len(skipped) == 1 else 'ies'}."
    return True, message
