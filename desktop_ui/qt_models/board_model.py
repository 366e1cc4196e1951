from typing import Any, Iterable, Optional
from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, QPersistentModelIndex, Qt

from pairs.board import Board
from pairs.ui_logic.grid_layout import CardLayout


class BoardModel(QAbstractListModel):
    """Row-major list of board cards for a QML grid surface.

    Face-down cards report symbol 0 so the surface cannot peek.
    """
    SymbolRole = Qt.ItemDataRole.UserRole + 1
    RevealedRole = Qt.ItemDataRole.UserRole + 2
    MatchedRole = Qt.ItemDataRole.UserRole + 3
    XRole = Qt.ItemDataRole.UserRole + 4
    YRole = Qt.ItemDataRole.UserRole + 5

    def __init__(self, board: Optional[Board] = None, layout: Optional[CardLayout] = None) -> None:
        super().__init__()
        self.board = board
        self.layout = layout

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        if parent.isValid() or self.board is None:
            return 0
        return self.board.size

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if self.board is None or not index.isValid() or index.row() >= self.board.size:
            return None

        card = self.board.card_at_index(index.row())

        if role == self.SymbolRole:
            return card.symbol if card.revealed else 0
        elif role == self.RevealedRole:
            return card.revealed
        elif role == self.MatchedRole:
            return card.matched
        elif role in (self.XRole, self.YRole):
            if self.layout is None:
                return 0.0
            x, y = self.layout.card_center(card.row, card.col)
            return x if role == self.XRole else y

        return None

    def roleNames(self) -> dict[int, QByteArray]:
        return {
            self.SymbolRole: QByteArray(b"symbol"),
            self.RevealedRole: QByteArray(b"revealed"),
            self.MatchedRole: QByteArray(b"matched"),
            self.XRole: QByteArray(b"cardX"),
            self.YRole: QByteArray(b"cardY"),
        }

    def set_board(self, board: Board) -> None:
        self.beginResetModel()
        self.board = board
        self.endResetModel()

    def set_layout(self, layout: CardLayout) -> None:
        self.layout = layout
        self._changed(range(self.rowCount()), [self.XRole, self.YRole])

    def refresh(self, indices: Optional[Iterable[int]] = None) -> None:
        """Signal that card flags changed (all cards when no indices given)."""
        rows = range(self.rowCount()) if indices is None else indices
        self._changed(rows, [self.SymbolRole, self.RevealedRole, self.MatchedRole])

    def _changed(self, rows: Iterable[int], roles: list[int]) -> None:
        for row in rows:
            idx = self.index(row, 0)
            self.dataChanged.emit(idx, idx, roles)
