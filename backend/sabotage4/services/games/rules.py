from typing import List, Optional

ROWS = 6
COLS = 7
CONNECT = 4

Board = List[List[Optional[str]]]

# (row step, col step) for horizontal, vertical and both diagonals
_AXES = ((0, 1), (1, 0), (1, 1), (-1, 1))


def create_empty_board() -> Board:
    return [[None for _ in range(COLS)] for _ in range(ROWS)]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


def landing_row(board: Board, col: int) -> Optional[int]:
    """Return the lowest empty row in ``col``, or None when the column is full."""
    for row in range(ROWS - 1, -1, -1):
        if board[row][col] is None:
            return row
    return None


def _run_length(board: Board, color: str, row: int, col: int, d_row: int, d_col: int) -> int:
    count = 0
    r, c = row + d_row, col + d_col
    while in_bounds(r, c) and board[r][c] == color:
        count += 1
        r += d_row
        c += d_col
    return count


def check_win(board: Board, color: Optional[str], row: int, col: int) -> bool:
    """Check whether the piece at (row, col) completes four in a row for ``color``.

    Counts same-colored neighbours in both directions along each axis through
    the placed cell.
    """
    if color is None or not in_bounds(row, col) or board[row][col] != color:
        return False
    for d_row, d_col in _AXES:
        run = 1
        run += _run_length(board, color, row, col, d_row, d_col)
        run += _run_length(board, color, row, col, -d_row, -d_col)
        if run >= CONNECT:
            return True
    return False


def check_draw(board: Board) -> bool:
    # Row 0 fills last in every column, so a full top row means a full board
    return all(cell is not None for cell in board[0])
