"""
The ValidationSession is the entrypoint into the domain layer for the grid / deck.
It owns the active template, debounces re-validation on the snapshot fingerprint and reports the
(valid, complete) pair to whoever subscribed.

States:
    EMPTY       no active template
    INCOMPLETE  fewer tiles placed than the template needs
    OVERFULL    more tiles placed than the template needs (never a match)
    INVALID     exact count, arrangement does not match
    VALID       exact count, arrangement matches
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.shared_types import ValidationStatus
from src.puzzle.matcher import MatchResult, matches
from src.puzzle.snapshot import PlacementSnapshot
from src.puzzle.template import Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationState:
    status: ValidationStatus = ValidationStatus.EMPTY

    @property
    def valid(self) -> bool:
        return self.status == ValidationStatus.VALID

    @property
    def complete(self) -> bool:
        return self.status in (
            ValidationStatus.OVERFULL,
            ValidationStatus.INVALID,
            ValidationStatus.VALID,
        )


class ValidationListener(Protocol):
    """What collaborators (deck, scoring, effects) implement to hear from the session."""

    def on_validation_changed(self, state: ValidationState) -> None:
        """Called whenever the (valid, complete) pair changes."""
        ...

    def on_became_valid(self, state: ValidationState, round_id: int) -> None:
        """Called once per transition into VALID. `round_id` was just incremented."""
        ...


class RoundGate:
    """
    'Play once per round' bookkeeping for effects.
    ----
    Rounds are counted by the session (one per transition into VALID) and handed in explicitly.
    """

    def __init__(self) -> None:
        self._last_played: Optional[int] = None

    def should_play(self, round_id: int) -> bool:
        """True the first time it is asked for a given round, False afterwards."""
        if self._last_played == round_id:
            return False
        self._last_played = round_id
        return True

    def reset(self) -> None:
        self._last_played = None


class ValidationSession:
    """Orchestration of template + snapshots -> validation state."""

    def __init__(self, listeners: Optional[list[ValidationListener]] = None) -> None:
        self._template: Optional[Template] = None
        self._snapshot = PlacementSnapshot()
        self._last_fingerprint: Optional[str] = None
        self._state = ValidationState()
        self._last_result: Optional[MatchResult] = None
        self._round_id = 0
        self._listeners: list[ValidationListener] = list(listeners or [])

    # --- READ-ONLY VIEW FOR COLLABORATORS ---
    @property
    def state(self) -> ValidationState:
        return self._state

    @property
    def is_valid(self) -> bool:
        return self._state.valid

    @property
    def is_complete(self) -> bool:
        return self._state.complete

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def active_template(self) -> Optional[Template]:
        return self._template

    @property
    def last_result(self) -> Optional[MatchResult]:
        """Matcher output of the last exact-count check (None if the matcher was not consulted)."""
        return self._last_result

    def subscribe(self, listener: ValidationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ValidationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- INPUTS ---
    def activate_template(self, template: Optional[Template]) -> ValidationState:
        """Swap the active template (never mutated in place) and re-check immediately."""
        self._template = template
        self._last_fingerprint = None
        if template is not None:
            logger.debug(
                "Active template: %s (tiles=%d) rules=%s",
                template.name,
                template.size,
                template.rules,
            )
        return self.push_snapshot(self._snapshot)

    def push_snapshot(self, snapshot: PlacementSnapshot) -> ValidationState:
        """
        New grid state from the grid reader.
        ----
        Only re-validates when the fingerprint differs from the last checked one, so callers may poll freely.
        """
        self._snapshot = snapshot
        fingerprint = snapshot.fingerprint(self._template)
        if fingerprint == self._last_fingerprint:
            return self._state

        self._last_fingerprint = fingerprint
        self._validate()
        return self._state

    def force_revalidation(self) -> ValidationState:
        """A tile reported a state change: forget the fingerprint and check the current snapshot again."""
        self._last_fingerprint = None
        return self.push_snapshot(self._snapshot)

    # --- PRIVATE HELPERS ---
    def _validate(self) -> None:
        self._last_result = None

        if self._template is None or not self._template.is_active:
            self._signal(ValidationStatus.EMPTY)
            return

        placed = len(self._snapshot)
        required = self._template.size
        logger.debug("placed=%d / required=%d", placed, required)

        if placed < required:
            self._signal(ValidationStatus.INCOMPLETE)
            return
        if placed > required:
            self._signal(ValidationStatus.OVERFULL)
            return

        result = matches(self._snapshot, self._template)
        self._last_result = result
        logger.debug("match=%s %s", result.matched, result.diagnostic)
        self._signal(ValidationStatus.VALID if result.matched else ValidationStatus.INVALID)

    def _signal(self, status: ValidationStatus) -> None:
        """
        Report the new state.

        NOTE: listeners only hear about changes of the (valid, complete) pair. INCOMPLETE -> EMPTY, for instance, is silent.
        """
        new_state = ValidationState(status)
        previous = self._state
        self._state = new_state

        if (previous.valid, previous.complete) == (new_state.valid, new_state.complete):
            return

        for listener in list(self._listeners):
            listener.on_validation_changed(new_state)

        if new_state.valid and not previous.valid:
            self._round_id += 1
            logger.debug("Became valid, round %d", self._round_id)
            for listener in list(self._listeners):
                listener.on_became_valid(new_state, self._round_id)
