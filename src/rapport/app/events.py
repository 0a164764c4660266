"""Events consumed by the update function and effects it hands back.

Events carry no behaviour; ``rapport.app.update.apply`` interprets them
according to the current mode. Effects are requests for the runtime to do
something the update function must not do itself (spawning the editor).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class ShowHelp:
    pass


@dataclass(frozen=True)
class HideHelp:
    pass


@dataclass(frozen=True)
class SelectNext:
    pass


@dataclass(frozen=True)
class SelectPrev:
    pass


@dataclass(frozen=True)
class SelectFirst:
    pass


@dataclass(frozen=True)
class SelectLast:
    pass


@dataclass(frozen=True)
class ViewReport:
    pass


@dataclass(frozen=True)
class ViewMeeting:
    display_index: int


@dataclass(frozen=True)
class NewMeeting:
    pass


@dataclass(frozen=True)
class EditMeeting:
    pass


@dataclass(frozen=True)
class EditMeetingFromList:
    display_index: int


@dataclass(frozen=True)
class UpdateMood:
    mood: int


@dataclass(frozen=True)
class ShowDeleteConfirm:
    pass


@dataclass(frozen=True)
class ConfirmDelete:
    pass


@dataclass(frozen=True)
class ShowNewReport:
    pass


@dataclass(frozen=True)
class CreateReport:
    pass


@dataclass(frozen=True)
class ArchiveReport:
    pass


@dataclass(frozen=True)
class CancelModal:
    pass


@dataclass(frozen=True)
class ModalLeft:
    pass


@dataclass(frozen=True)
class ModalRight:
    pass


@dataclass(frozen=True)
class ModalNextField:
    pass


@dataclass(frozen=True)
class ModalPrevField:
    pass


@dataclass(frozen=True)
class ShowEntryInput:
    pass


@dataclass(frozen=True)
class SetEntryMood:
    mood: int


@dataclass(frozen=True)
class CycleEntryContext:
    pass


@dataclass(frozen=True)
class SaveEntry:
    pass


@dataclass(frozen=True)
class RefreshData:
    pass


@dataclass(frozen=True)
class Input:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Enter:
    pass


Event = (
    Quit | Back | ShowHelp | HideHelp
    | SelectNext | SelectPrev | SelectFirst | SelectLast
    | ViewReport | ViewMeeting | NewMeeting | EditMeeting | EditMeetingFromList
    | UpdateMood | ShowDeleteConfirm | ConfirmDelete
    | ShowNewReport | CreateReport | ArchiveReport
    | CancelModal | ModalLeft | ModalRight | ModalNextField | ModalPrevField
    | ShowEntryInput | SetEntryMood | CycleEntryContext | SaveEntry
    | RefreshData | Input | Backspace | Enter
)


@dataclass(frozen=True)
class NoEffect:
    pass


@dataclass(frozen=True)
class SpawnEditor:
    """Open ``path`` in the external editor, then reconcile the result."""

    path: Path
    is_new: bool = False


Effect = NoEffect | SpawnEditor

NO_EFFECT = NoEffect()
