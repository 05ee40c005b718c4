from __future__ import annotations
import argparse
import logging
import tkinter as tk
from typing import Optional

from mnk.board import Cell, MAX_SIZE, MIN_SIZE, MIN_WIN
from mnk.config import GameConfig, Mode
from mnk.game import GameController
from mnk.rules import Status
from engine.worker import MoveRequest, MoveWorker
from ui.prefs import load_prefs, save_prefs

logger = logging.getLogger(__name__)

BOARD_PX = 480
PADDING = 20
BG = "#10264d"
COLOR_CELL = "#1b3a6b"
COLOR_WIN = "#3f6f3a"
COLOR_X = "#ff595e"
COLOR_O = "#8ac926"


def thinking_delay(n: int) -> int:
    """ms to wait before the computer starts; bigger boards get a longer pause."""
    return 500 if n > 5 else 200


def status_text(game: GameController) -> str:
    if game.status is Status.WON:
        return f"{game.winner.symbol} wins!"
    if game.status is Status.DRAW:
        return "Draw!"
    if game.ai_pending:
        return f"AI ({game.mode.value}) is thinking..."
    return f"{game.to_move.symbol} turn"


class App(tk.Tk):
    def __init__(self, cfg: Optional[GameConfig] = None):
        super().__init__()
        self.title("m,n,k — Tic-Tac-Toe")
        self.resizable(False, False)

        cfg = cfg or load_prefs()
        self.game = GameController(cfg.n, cfg.k, cfg.mode)
        self.worker = MoveWorker(self._on_worker_result, rng=self.game.rng)
        self._ai_timer = None

        side = BOARD_PX + 2*PADDING
        self.canvas = tk.Canvas(self, width=side, height=side, bg=BG, highlightthickness=0)
        self.canvas.grid(row=0, column=0, columnspan=6, padx=10, pady=10)

        # Controls
        tk.Label(self, text="Size:").grid(row=1, column=0, sticky="e")
        self.size_var = tk.IntVar(value=self.game.n)
        tk.OptionMenu(self, self.size_var, *range(MIN_SIZE, MAX_SIZE + 1),
                      command=lambda _: self.apply_settings()).grid(row=1, column=1, sticky="w")

        tk.Label(self, text="Win:").grid(row=1, column=2, sticky="e")
        self.win_var = tk.IntVar(value=self.game.k)
        self.win_menu = tk.OptionMenu(self, self.win_var, self.game.k)
        self.win_menu.grid(row=1, column=3, sticky="w")
        self._refresh_win_choices()

        tk.Label(self, text="Opponent:").grid(row=1, column=4, sticky="e")
        self.mode_var = tk.StringVar(value=self.game.mode.value)
        tk.OptionMenu(self, self.mode_var, *[m.value for m in Mode],
                      command=self.change_mode).grid(row=1, column=5, sticky="w")

        self.btn_new = tk.Button(self, text="New Game", command=self.new_game)
        self.btn_new.grid(row=2, column=0, pady=5)

        self.btn_undo = tk.Button(self, text="Undo", command=self.undo)
        self.btn_undo.grid(row=2, column=1, pady=5)

        self.status = tk.StringVar(value="Click a cell to play.")
        tk.Label(self, textvariable=self.status).grid(row=2, column=2, columnspan=4, sticky="w")

        self.canvas.bind("<Button-1>", self.on_click)
        self.draw_board()

    # ---- settings ----
    def _refresh_win_choices(self):
        menu = self.win_menu["menu"]
        menu.delete(0, "end")
        for k in range(MIN_WIN, self.size_var.get() + 1):
            menu.add_command(label=str(k), command=lambda v=k: self._pick_win(v))

    def _pick_win(self, k: int):
        self.win_var.set(k)
        self.apply_settings()

    def apply_settings(self):
        self._cancel_timer()
        self.game.reset(self.size_var.get(), self.win_var.get())
        # clamping may have pulled K down to the new size
        self.size_var.set(self.game.n)
        self.win_var.set(self.game.k)
        self._refresh_win_choices()
        save_prefs(self.game.config)
        self.refresh()

    def change_mode(self, value):
        self._cancel_timer()
        self.game.set_mode(value)
        save_prefs(self.game.config)
        self.refresh()
        self.schedule_ai_move()

    # ---- game actions ----
    def new_game(self):
        self._cancel_timer()
        self.game.reset()
        self.refresh()
        self.status.set("Game Started")
        self.schedule_ai_move()

    def undo(self):
        self._cancel_timer()
        if not self.game.undo():
            return
        # against the computer, step back to the human's own turn
        if self.game.is_ai_turn:
            self.game.undo()
        self.refresh()
        self.schedule_ai_move()

    def on_click(self, event):
        cell = BOARD_PX / self.game.n
        col = int((event.x - PADDING) // cell)
        row = int((event.y - PADDING) // cell)
        if not (0 <= row < self.game.n and 0 <= col < self.game.n):
            return
        if self.game.is_ai_turn:
            return
        if not self.game.apply_move(row*self.game.n + col):
            return
        self.refresh()
        self.schedule_ai_move()

    # ---- computer ----
    def schedule_ai_move(self):
        if not self.game.is_ai_turn or self.game.ai_pending:
            return
        self._ai_timer = self.after(thinking_delay(self.game.n), self.maybe_ai_move)

    def maybe_ai_move(self):
        self._ai_timer = None
        request = self.game.request_ai_move()
        if request is None:
            return
        self.refresh()
        # run AI on a thread
        self.worker.submit(request)

    def _on_worker_result(self, request: MoveRequest, move: Optional[int]):
        # worker thread: hop back to Tk before touching anything
        self.after(0, self.post_ai_move, request, move)

    def post_ai_move(self, request: MoveRequest, move: Optional[int]):
        if self.game.resolve_ai_move(request, move):
            self.refresh()

    def _cancel_timer(self):
        if self._ai_timer is not None:
            self.after_cancel(self._ai_timer)
            self._ai_timer = None

    # ---- drawing ----
    def refresh(self):
        self.draw_board()
        self.status.set(status_text(self.game))
        self.btn_undo.configure(state=tk.NORMAL if self.game.can_undo else tk.DISABLED)

    def draw_board(self):
        self.canvas.delete("all")
        n = self.game.n
        cell = BOARD_PX / n
        board = self.game.board
        winning = set(self.game.winning_line)
        for i, val in enumerate(board.cells):
            r, c = divmod(i, n)
            x0 = PADDING + c*cell + 3
            y0 = PADDING + r*cell + 3
            x1, y1 = x0 + cell - 6, y0 + cell - 6
            fill = COLOR_WIN if i in winning else COLOR_CELL
            self.canvas.create_rectangle(x0, y0, x1, y1, fill=fill, outline=BG, width=2)
            if val is Cell.EMPTY:
                continue
            color = COLOR_X if val is Cell.X else COLOR_O
            self.canvas.create_text((x0 + x1)/2, (y0 + y1)/2, text=val.symbol, fill=color,
                                    font=("Helvetica", int(cell*0.5), "bold"))


def launch(argv=None):
    ap = argparse.ArgumentParser(description="m,n,k game")
    ap.add_argument("--size", type=str, default=None, help="board side, clamped to [3, 8]")
    ap.add_argument("--win", type=str, default=None, help="marks in a row to win, clamped to [3, size]")
    ap.add_argument("--mode", type=str, default=None, help="human / easy / medium / hard")
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    cfg = load_prefs()
    if args.size is not None or args.win is not None or args.mode is not None:
        cfg = GameConfig.from_raw(args.size if args.size is not None else cfg.n,
                                  args.win, args.mode if args.mode is not None else cfg.mode)
    app = App(cfg)
    app.mainloop()

if __name__ == "__main__":
    launch()
