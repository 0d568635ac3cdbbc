"""
Authoring form state

The editor works on all four locale drafts of one article at once. This
module holds that state as an immutable value and a single ``reduce``
function that applies one event at a time, so every transition can be
tested without a UI or a database.

Per locale the state tracks the draft itself, whether it has been edited
since the last acknowledged persist (dirty) and whether the server holds
it (saved). The publish/save/archive gates are derived, never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from vibrant.i18n.locale import SUPPORTED_LOCALES, Locale
from vibrant.models.article import ArticleStatus
from vibrant.services.publishing import PublishAction, is_complete

EDITABLE_FIELDS = ("title", "body_md")

FIELD_ERROR_MESSAGES = {
    "title": "Title required",
    "body_md": "Body required",
}


@dataclass(frozen=True)
class LocaleDraft:
    """One locale's editable content."""

    locale: Locale
    title: str = ""
    body_md: str = ""
    published: bool = False

    @property
    def is_blank(self) -> bool:
        """Nothing authored yet; not an error, just not publishable."""
        return not self.title.strip() and not self.body_md.strip()

    @property
    def is_valid(self) -> bool:
        return is_complete(self.title, self.body_md)

    def field_errors(self) -> dict[str, str]:
        """Error against the empty field when exactly one of the two is filled."""
        if self.is_blank or self.is_valid:
            return {}
        missing = "title" if not self.title.strip() else "body_md"
        return {missing: FIELD_ERROR_MESSAGES[missing]}


# ============== Events ==============


@dataclass(frozen=True)
class FieldEdited:
    locale: Locale
    field: str
    value: str


@dataclass(frozen=True)
class StatusSelected:
    status: ArticleStatus


@dataclass(frozen=True)
class PersistStarted:
    action: PublishAction
    locales: frozenset[Locale] = frozenset()


@dataclass(frozen=True)
class PersistSucceeded:
    """The store's response: the article as it now exists server side."""

    article_id: str
    status: ArticleStatus
    translations: tuple[Any, ...] = ()


@dataclass(frozen=True)
class PersistFailed:
    message: str


# ============== State ==============


@dataclass(frozen=True)
class AuthoringState:
    article_id: str | None
    status: ArticleStatus
    drafts: dict[Locale, LocaleDraft]
    # Status the store last acknowledged; the selected one may differ until the next persist
    stored_status: ArticleStatus = ArticleStatus.DRAFT
    saved_locales: frozenset[Locale] = frozenset()
    dirty_locales: frozenset[Locale] = frozenset()
    pending: PublishAction | None = None
    # Drafts as they were when the pending persist was sent
    in_flight: dict[Locale, LocaleDraft] = field(default_factory=dict)
    last_error: str | None = None
    # Locales that went unsaved → saved in the last acknowledged persist
    notifications: tuple[Locale, ...] = field(default=())

    @property
    def in_flight_locales(self) -> frozenset[Locale]:
        return frozenset(self.in_flight)

    @property
    def valid_locales(self) -> frozenset[Locale]:
        return frozenset(locale for locale, draft in self.drafts.items() if draft.is_valid)

    def is_saved(self, locale: Locale | str) -> bool:
        return Locale(locale) in self.saved_locales

    def is_dirty(self, locale: Locale | str) -> bool:
        return Locale(locale) in self.dirty_locales

    @property
    def can_publish(self) -> bool:
        return all(locale in self.valid_locales for locale in SUPPORTED_LOCALES)

    @property
    def can_archive(self) -> bool:
        return self.stored_status != ArticleStatus.ARCHIVED

    @property
    def has_changes(self) -> bool:
        """Dirty locales, or nothing ever saved (keeps Save usable on a new form)."""
        return bool(self.dirty_locales) or not self.saved_locales

    @property
    def is_busy(self) -> bool:
        return self.pending is not None

    @property
    def can_save(self) -> bool:
        return self.has_changes and not self.is_busy

    def field_errors(self) -> dict[Locale, dict[str, str]]:
        errors = {}
        for locale in SUPPORTED_LOCALES:
            draft_errors = self.drafts[locale].field_errors()
            if draft_errors:
                errors[locale] = draft_errors
        return errors


def _draft_from(translation: Any) -> LocaleDraft:
    return LocaleDraft(
        locale=Locale(translation.locale),
        title=translation.title or "",
        body_md=translation.body_md or "",
        published=bool(translation.published),
    )


def initial_state(
    article_id: str | None = None,
    status: ArticleStatus = ArticleStatus.DRAFT,
    translations: Iterable[Any] = (),
) -> AuthoringState:
    """State for a freshly opened form.

    Every supported locale gets a draft (blank when not loaded). Loaded
    locales with a non-empty title and body start out saved.
    """
    drafts = {locale: LocaleDraft(locale=locale) for locale in SUPPORTED_LOCALES}
    saved = set()
    for translation in translations:
        draft = _draft_from(translation)
        drafts[draft.locale] = draft
        if draft.is_valid:
            saved.add(draft.locale)

    return AuthoringState(
        article_id=article_id,
        status=ArticleStatus(status),
        drafts=drafts,
        stored_status=ArticleStatus(status),
        saved_locales=frozenset(saved),
    )


# ============== Reducer ==============


def _field_edited(state: AuthoringState, event: FieldEdited) -> AuthoringState:
    if event.field not in EDITABLE_FIELDS:
        raise ValueError(f"Unknown field '{event.field}', expected one of {EDITABLE_FIELDS}")

    locale = Locale(event.locale)
    draft = state.drafts[locale]
    if getattr(draft, event.field) == event.value:
        return state

    drafts = dict(state.drafts)
    drafts[locale] = replace(draft, **{event.field: event.value})
    return replace(
        state,
        drafts=drafts,
        saved_locales=state.saved_locales - {locale},
        dirty_locales=state.dirty_locales | {locale},
    )


def _same_content(current: LocaleDraft, sent: LocaleDraft) -> bool:
    return current.title == sent.title and current.body_md == sent.body_md


def _persist_succeeded(state: AuthoringState, event: PersistSucceeded) -> AuthoringState:
    acknowledged = {Locale(t.locale): t for t in event.translations}

    # A locale counts as saved only if the server returned it and either it
    # was sent unchanged since, or it was already clean and saved before.
    confirmed = frozenset(
        locale
        for locale in acknowledged
        if locale in state.in_flight and _same_content(state.drafts[locale], state.in_flight[locale])
    )
    still_saved = frozenset(
        locale for locale in state.saved_locales if locale in acknowledged and locale not in state.dirty_locales
    )
    saved = confirmed | still_saved

    drafts = dict(state.drafts)
    for locale in confirmed:
        drafts[locale] = _draft_from(acknowledged[locale])

    return replace(
        state,
        article_id=event.article_id,
        status=ArticleStatus(event.status),
        drafts=drafts,
        stored_status=ArticleStatus(event.status),
        saved_locales=saved,
        dirty_locales=state.dirty_locales - confirmed,
        pending=None,
        in_flight={},
        last_error=None,
        notifications=tuple(locale for locale in SUPPORTED_LOCALES if locale in saved - state.saved_locales),
    )


def reduce(state: AuthoringState, event: Any) -> AuthoringState:
    """Apply one event and return the next state. ``state`` is never mutated."""
    if isinstance(event, FieldEdited):
        return _field_edited(state, event)

    if isinstance(event, StatusSelected):
        return replace(state, status=ArticleStatus(event.status))

    if isinstance(event, PersistStarted):
        return replace(
            state,
            pending=PublishAction(event.action),
            in_flight={Locale(locale): state.drafts[Locale(locale)] for locale in event.locales},
            last_error=None,
            notifications=(),
        )

    if isinstance(event, PersistSucceeded):
        return _persist_succeeded(state, event)

    if isinstance(event, PersistFailed):
        # Drafts, dirty and saved flags stay exactly as they were
        return replace(state, pending=None, in_flight={}, last_error=event.message)

    raise TypeError(f"Unknown authoring event: {type(event).__name__}")
