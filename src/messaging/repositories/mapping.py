"""
Entity mapping and fetch plans used by every repository.

`EntityMapping` names the concrete ORM classes that play each role in the
messaging schema. Repositories never import models directly; they build
their queries from the mapping, so a deployment with its own tables only has
to supply classes exposing the same attribute names:

| Role           | Attributes used by the queries                                  |
| -------------- | --------------------------------------------------------------- |
| `person`       | `id`                                                            |
| `tag`          | `id`, `name`                                                    |
| `conversation` | `id`, `participants`, `messages` (ordered by date, id)          |
| `participant`  | `conversation_id`, `person_id`, `conversation`, `person`, `tags`|
| `message`      | `id`, `date`, `conversation_id`, `sender`, `recipients`         |
| `recipient`    | `message_id`, `person_id`, `read`, `person`                     |

`FetchPlan` lists which relations to eager-load so a single call returns the
whole graph without N+1 lazy loads (which would fail outright on an
AsyncSession anyway).
"""
from dataclasses import dataclass, fields
from importlib import import_module
from typing import Any

from sqlalchemy.orm import joinedload, selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from messaging.models import (
    Conversation,
    ConversationParticipant,
    Message,
    MessageRecipient,
    Person,
    Tag,
)


def _import_path(path: str) -> type:
    """Resolve 'package.module.ClassName' (or 'package.module:ClassName') to the class."""
    module_name, _, attr = path.replace(":", ".").rpartition(".")
    if not module_name:
        raise ValueError(f"Not a dotted class path: {path!r}")
    return getattr(import_module(module_name), attr)


@dataclass(frozen=True)
class EntityMapping:
    """Concrete classes backing each entity role. Defaults are the bundled models."""

    conversation: type = Conversation
    participant: type = ConversationParticipant
    message: type = Message
    recipient: type = MessageRecipient
    tag: type = Tag
    person: type = Person

    @classmethod
    def from_paths(cls, paths: dict[str, str] | None = None) -> "EntityMapping":
        """
        Build a mapping from role -> dotted class path overrides (the
        ENTITY_MAPPING setting). Roles left out keep their default class.

        Raises:
            ValueError: If a role name is unknown.
        """
        paths = paths or {}
        roles = {f.name for f in fields(cls)}
        unknown = sorted(set(paths) - roles)
        if unknown:
            raise ValueError(f"Unknown entity role(s): {', '.join(unknown)}")
        return cls(**{role: _import_path(path) for role, path in paths.items()})


@dataclass(frozen=True)
class FetchPlan:
    """
    Which relations to eager-load.

    Defaults match the conversation list/detail payload: participants with
    their person and tags, messages with their sender. Recipients are opt-in.
    """

    participants: bool = True
    participant_persons: bool = True
    participant_tags: bool = True
    messages: bool = True
    message_senders: bool = True
    message_recipients: bool = False

    def conversation_options(self, mapping: EntityMapping) -> list[LoaderOption]:
        options: list[LoaderOption] = []
        c, p, m = mapping.conversation, mapping.participant, mapping.message

        if self.participants:
            participants = selectinload(c.participants)
            if self.participant_persons:
                options.append(participants.joinedload(p.person))
            if self.participant_tags:
                options.append(selectinload(c.participants).selectinload(p.tags))
            if not (self.participant_persons or self.participant_tags):
                options.append(participants)

        if self.messages:
            messages = selectinload(c.messages)
            if self.message_senders:
                options.append(messages.joinedload(m.sender))
            if self.message_recipients:
                options.append(selectinload(c.messages).selectinload(m.recipients))
            if not (self.message_senders or self.message_recipients):
                options.append(messages)

        return options

    def message_options(self, mapping: EntityMapping) -> list[LoaderOption]:
        options: list[LoaderOption] = []
        m = mapping.message
        if self.message_senders:
            options.append(joinedload(m.sender))
        if self.message_recipients:
            options.append(selectinload(m.recipients))
        return options

    def participant_options(self, mapping: EntityMapping) -> list[LoaderOption]:
        p = mapping.participant
        options: list[LoaderOption] = [joinedload(p.conversation)]
        if self.participant_persons:
            options.append(joinedload(p.person))
        if self.participant_tags:
            options.append(selectinload(p.tags))
        return options


DEFAULT_MAPPING = EntityMapping()
DEFAULT_PLAN = FetchPlan()


def describe_plan(plan: FetchPlan) -> dict[str, Any]:
    """Flat dict of the enabled relations, used in debug logs."""
    return {f.name: getattr(plan, f.name) for f in fields(plan) if getattr(plan, f.name)}
