"""Clip collection held by a review session."""

from __future__ import annotations

from typing import Iterable, Iterator

from clipscribe.models.clip import Clip


class ClipSet:
    """Immutable, ordered collection of clips with per-clip selection.

    Membership and order are fixed at construction; only selection flags
    change, and every change yields a new ``ClipSet``.
    """

    __slots__ = ("_clips",)

    def __init__(self, clips: Iterable[Clip] = ()):
        self._clips: tuple[Clip, ...] = tuple(clips)

    @classmethod
    def from_analysis(cls, clips: Iterable[Clip]) -> ClipSet:
        """Build the review set, marking every clip as selected."""
        return cls(clip.with_selection(True) for clip in clips)

    def toggle(self, clip_id: str) -> ClipSet:
        """Return a copy with the matching clip's selection inverted.

        An unknown id returns ``self`` unchanged.
        """
        if clip_id not in self.ids():
            return self
        return ClipSet(
            clip.with_selection(not clip.is_selected) if clip.id == clip_id else clip
            for clip in self._clips
        )

    def selected(self) -> tuple[Clip, ...]:
        return tuple(clip for clip in self._clips if clip.is_selected)

    def selected_count(self) -> int:
        return sum(1 for clip in self._clips if clip.is_selected)

    def ids(self) -> list[str]:
        return [clip.id for clip in self._clips]

    def get(self, clip_id: str) -> Clip | None:
        for clip in self._clips:
            if clip.id == clip_id:
                return clip
        return None

    @property
    def clips(self) -> tuple[Clip, ...]:
        return self._clips

    def __iter__(self) -> Iterator[Clip]:
        return iter(self._clips)

    def __len__(self) -> int:
        return len(self._clips)

    def __getitem__(self, index: int) -> Clip:
        return self._clips[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClipSet):
            return NotImplemented
        return self._clips == other._clips

    def __hash__(self) -> int:
        return hash(self._clips)

    def __repr__(self) -> str:
        return f"ClipSet({len(self._clips)} clips, {self.selected_count()} selected)"
