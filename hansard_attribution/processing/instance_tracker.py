"""Deduplicate and order resolved headers into speaking instances."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from hansard_attribution.models import (
    HeaderMatch,
    ResolvedSpeaker,
    ResolvedSpeakingInstance,
    UnmatchedSpeaker,
)

from .normalizer import clean_captured_text, normalize, normalize_constituency
from .speaker_resolver import SpeakerResolver

logger = structlog.get_logger(__name__)


@dataclass
class TrackingResult:
    """Position-sorted instances and deduplicated diagnostics of one transcript."""

    instances: list[ResolvedSpeakingInstance] = field(default_factory=list)
    unmatched: list[UnmatchedSpeaker] = field(default_factory=list)
    skipped: int = 0

    @property
    def unique_speaker_count(self) -> int:
        return len({i.legislator_id for i in self.instances})


class InstanceTracker:
    """Turn raw header matches from every form and chunk into a canonical sequence.

    The canonical order depends only on header positions, never on the order
    forms or chunks were scanned in. When several forms match at the same
    position, the first resolution seen wins.
    """

    def __init__(self, resolver: SpeakerResolver):
        self._resolver = resolver

    def track(self, matches: Iterable[HeaderMatch]) -> TrackingResult:
        """Resolve, deduplicate, sort and number ``matches``.

        Args:
            matches: Header matches in scan order (priority form first).

        Returns:
            TrackingResult whose instances carry speaking order and per-legislator
            instance numbers, with ``speech_text`` still unset.
        """
        resolved: dict[int, ResolvedSpeaker] = {}
        unmatched: dict[int, UnmatchedSpeaker] = {}
        skipped = 0

        for match in matches:
            if match.position in resolved:
                continue
            outcome = self._resolver.resolve(match)
            if outcome is None:
                skipped += 1
            elif isinstance(outcome, ResolvedSpeaker):
                resolved[match.position] = outcome
            else:
                unmatched.setdefault(match.position, outcome)

        instances, order_at = self._number(sorted(resolved.values(), key=lambda r: r.match.position))
        diagnostics = self._dedupe_unmatched(unmatched, set(resolved), order_at)

        logger.info(
            "instances_tracked",
            instances=len(instances),
            unique_speakers=len({i.legislator_id for i in instances}),
            unmatched=len(diagnostics),
            skipped=skipped,
        )
        return TrackingResult(instances=instances, unmatched=diagnostics, skipped=skipped)

    @staticmethod
    def _number(
        ordered: list[ResolvedSpeaker],
    ) -> tuple[list[ResolvedSpeakingInstance], list[tuple[int, int]]]:
        """Assign speaking order and instance numbers in one walk.

        Also returns ``(position, next_speaking_order)`` checkpoints so
        diagnostics can be placed on the same counter.
        """
        speaking_order: dict[str, int] = {}
        instance_counts: dict[str, int] = {}
        instances: list[ResolvedSpeakingInstance] = []
        checkpoints: list[tuple[int, int]] = []

        for speaker in ordered:
            if speaker.legislator_id not in speaking_order:
                speaking_order[speaker.legislator_id] = len(speaking_order) + 1
            instance_counts[speaker.legislator_id] = instance_counts.get(speaker.legislator_id, 0) + 1

            match = speaker.match
            instances.append(
                ResolvedSpeakingInstance(
                    legislator_id=speaker.legislator_id,
                    legislator_name=speaker.legislator_name,
                    constituency=speaker.constituency,
                    session_speaking_order=speaking_order[speaker.legislator_id],
                    instance_number_for_legislator=instance_counts[speaker.legislator_id],
                    header_position=match.position,
                    header_length=match.length,
                    line_number=match.line_number,
                    captured_header=clean_captured_text(match.raw_text),
                    header_form=match.form,
                )
            )
            checkpoints.append((match.position, len(speaking_order) + 1))

        return instances, checkpoints

    @staticmethod
    def _dedupe_unmatched(
        unmatched: dict[int, UnmatchedSpeaker],
        resolved_positions: set[int],
        checkpoints: list[tuple[int, int]],
    ) -> list[UnmatchedSpeaker]:
        seen: set[tuple[str, str]] = set()
        diagnostics: list[UnmatchedSpeaker] = []

        for position in sorted(unmatched):
            if position in resolved_positions:
                continue
            speaker = unmatched[position]
            key = (
                normalize(speaker.extracted_name),
                normalize_constituency(speaker.extracted_constituency or ""),
            )
            if key in seen:
                continue
            seen.add(key)
            diagnostics.append(
                speaker.model_copy(update={"order": _order_at(position, checkpoints)})
            )
        return diagnostics


def _order_at(position: int, checkpoints: list[tuple[int, int]]) -> int:
    """Speaking-order counter value in effect at ``position``."""
    current: Optional[int] = None
    for checkpoint_position, next_order in checkpoints:
        if checkpoint_position > position:
            break
        current = next_order
    return current if current is not None else 1
