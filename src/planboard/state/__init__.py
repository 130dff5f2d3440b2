"""View state: immutable board record, reducer, task form and notices."""

from planboard.state.board import (
    BoardState,
    CloseModal,
    DataLoaded,
    DismissNotice,
    EditField,
    ExpireNotices,
    LoadStarted,
    ModalKind,
    ModalState,
    OpenCreate,
    OpenEdit,
    PushNotice,
    SelectProject,
    SetView,
    reduce,
)
from planboard.state.form import TaskForm, create_form, edit_form
from planboard.state.notices import Notice, NoticeKind, make_notice

__all__ = [
    "BoardState",
    "CloseModal",
    "DataLoaded",
    "DismissNotice",
    "EditField",
    "ExpireNotices",
    "LoadStarted",
    "ModalKind",
    "ModalState",
    "Notice",
    "NoticeKind",
    "OpenCreate",
    "OpenEdit",
    "PushNotice",
    "SelectProject",
    "SetView",
    "TaskForm",
    "create_form",
    "edit_form",
    "make_notice",
    "reduce",
]
