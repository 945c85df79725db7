# polytris_layout.py
from dataclasses import dataclass
from polytris_config import CONFIG, COLS, ROWS, SHAPE_TYPE_COUNT, MAX_SHAPE_SIZE

@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    pv_cell: int
    catalog_cols: int

def compute_dims() -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    pv_cell = max(8, cell // 3)
    catalog_cols = 3
    # catalog grid is catalog_cols previews wide, each MAX_SHAPE_SIZE cells plus a gap
    panel_w = max(220, catalog_cols * (MAX_SHAPE_SIZE + 1) * pv_cell + 24)

    board_w = COLS * cell
    board_h = ROWS * cell

    catalog_rows = -(-SHAPE_TYPE_COUNT // catalog_cols)
    panel_h = 330 + catalog_rows * (MAX_SHAPE_SIZE + 1) * pv_cell

    total_w = margin + board_w + margin + panel_w + margin
    total_h = margin + max(board_h, panel_h) + margin

    board_x = margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y,
        pv_cell=pv_cell, catalog_cols=catalog_cols,
    )
