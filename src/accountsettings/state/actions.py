"""Commands that can be dispatched into stores.

Dispatch is broadcast-style: every registered store sees every action and
picks out the kinds it understands.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Action(BaseModel):
    """Base for anything delivered through a :class:`Dispatcher`."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class Validate(Action):
    """Check whether ``username`` is available and acceptable."""

    username: str


class SaveUsername(Action):
    """Change the account username to ``username``."""

    username: str


AccountSettingsAction = Validate | SaveUsername
