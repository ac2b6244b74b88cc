"""
Dialog windows for BankerLedger GUI
"""
from __future__ import annotations
from decimal import Decimal
from typing import Dict, Optional

try:
    import tkinter as tk
    from tkinter import ttk, messagebox
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None

from models import GameRound, Session
from utils import ZERO, format_amount, parse_amount, to_amount


class RoundDialog(tk.Toplevel):
    """Dialog for editing one round: banker and each player's result"""

    def __init__(self, master, session: Session, game_round: GameRound, index: int):
        super().__init__(master)
        self.title(f"Round {index}")
        self.resizable(False, False)
        self.session = session
        self.players = list(session.players)
        self.names = {p.id: p.name for p in self.players}
        # names may repeat, so the banker choice is labelled by roster position
        self.labels = {f"{i}. {p.name}": p.id for i, p in enumerate(self.players, start=1)}
        # result: (banker_id, {player_id: amount}) on OK
        self.result: Optional[tuple] = None

        self._bind_enter_to_ok()

        frm = ttk.Frame(self, padding=10)
        frm.grid(row=0, column=0, sticky="nsew")

        r = 0
        ttk.Label(frm, text="Banker").grid(row=r, column=0, sticky="w")
        banker_label = next((k for k, v in self.labels.items() if v == game_round.banker_id), "")
        self.v_banker = tk.StringVar(value=banker_label)
        ttk.Combobox(frm, textvariable=self.v_banker, values=list(self.labels),
                     width=18, state="readonly").grid(row=r, column=1, columnspan=3, sticky="w")
        r += 1

        ttk.Label(frm, text=f"Step: {format_amount(Decimal(session.money_step))}").grid(
            row=r, column=0, columnspan=4, sticky="w", pady=(6, 4)
        )
        r += 1

        self.vars: Dict[str, tk.StringVar] = {}
        self.entries: Dict[str, ttk.Entry] = {}
        for p in self.players:
            ttk.Label(frm, text=p.name).grid(row=r, column=0, sticky="w", pady=2)
            v = tk.StringVar(value=self._initial_text(game_round, p.id))
            self.vars[p.id] = v
            ttk.Button(frm, text="-", width=2,
                       command=lambda pid=p.id: self._step(pid, -1)).grid(row=r, column=1)
            e = ttk.Entry(frm, textvariable=v, width=14, justify="right")
            e.grid(row=r, column=2, sticky="w")
            self.entries[p.id] = e
            ttk.Button(frm, text="+", width=2,
                       command=lambda pid=p.id: self._step(pid, 1)).grid(row=r, column=3)
            v.trace_add("write", lambda *_: self._update_banker_label())
            r += 1

        self.banker_var = tk.StringVar(value="")
        ttk.Label(frm, textvariable=self.banker_var).grid(row=r, column=0, columnspan=4, sticky="w", pady=(8, 0))
        r += 1

        btns = ttk.Frame(frm)
        btns.grid(row=r, column=0, columnspan=4, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="OK", command=self._ok).grid(row=0, column=0, padx=4)
        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=1, padx=4)

        self.v_banker.trace_add("write", lambda *_: self._on_banker_change())
        self._on_banker_change()

        self.grab_set()
        self.transient(master)

    @staticmethod
    def _initial_text(game_round: GameRound, player_id: str) -> str:
        if player_id not in game_round.values:
            return ""
        return format_amount(to_amount(game_round.values[player_id]))

    def _bind_enter_to_ok(self):
        """Bind Enter/Return to OK"""

        def on_enter(event=None):
            self._ok()
            return "break"

        self.bind("<Return>", on_enter)
        self.bind("<KP_Enter>", on_enter)

    def _banker_id(self) -> str:
        return self.labels.get(self.v_banker.get(), "")

    def _step(self, player_id: str, direction: int):
        """Move a player's value by one money step"""
        if player_id == self._banker_id():
            return
        cur = parse_amount(self.vars[player_id].get(), ZERO)
        self.vars[player_id].set(format_amount(cur + direction * Decimal(self.session.money_step)))

    def _on_banker_change(self):
        """Banker's entry is derived, so lock it"""
        banker_id = self._banker_id()
        for pid, e in self.entries.items():
            e.configure(state="disabled" if pid == banker_id else "normal")
        self._update_banker_label()

    def _update_banker_label(self):
        """Show the banker's implied value"""
        banker_id = self._banker_id()
        if not banker_id:
            self.banker_var.set("No banker: this round will not count.")
            return
        total = sum((parse_amount(v.get(), ZERO) for pid, v in self.vars.items() if pid != banker_id), ZERO)
        self.banker_var.set(f"{self.names[banker_id]} (banker): {format_amount(-total)}")

    def _ok(self):
        """Validate and save round"""
        banker_id = self._banker_id()
        values = {}
        for p in self.players:
            if p.id == banker_id:
                continue
            text = self.vars[p.id].get().strip()
            amt = parse_amount(text, None) if text else ZERO
            if amt is None:
                messagebox.showerror("Invalid amount", f"Amount for {p.name} must be a number.")
                return
            values[p.id] = amt
        self.result = (banker_id, values)
        self.destroy()

    def _cancel(self):
        """Cancel and close"""
        self.result = None
        self.destroy()
