"""Cached uid/gid to name lookups for the details view."""

from __future__ import annotations

import grp
import os
import pwd


class UserCache:
    """Per-listing memo of user and group names.

    Unknown ids are returned as their decimal number.
    """

    def __init__(self, current_uid: int | None = None) -> None:
        self.current_uid = os.getuid() if current_uid is None else current_uid
        self._users: dict[int, str] = {}
        self._groups: dict[int, str] = {}
        self._current_groups: frozenset[int] | None = None

    def user_name(self, uid: int) -> str:
        name = self._users.get(uid)
        if name is None:
            try:
                name = pwd.getpwuid(uid).pw_name
            except KeyError:
                name = str(uid)
            self._users[uid] = name
        return name

    def group_name(self, gid: int) -> str:
        name = self._groups.get(gid)
        if name is None:
            try:
                name = grp.getgrgid(gid).gr_name
            except KeyError:
                name = str(gid)
            self._groups[gid] = name
        return name

    def is_current_user(self, uid: int) -> bool:
        return uid == self.current_uid

    def is_current_group(self, gid: int) -> bool:
        if self._current_groups is None:
            self._current_groups = frozenset({os.getgid(), *os.getgroups()})
        return gid in self._current_groups
