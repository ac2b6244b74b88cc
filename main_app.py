"""
Main application window for BankerLedger GUI
"""
from __future__ import annotations
import logging
import os
from typing import Optional

try:
    import tkinter as tk
    from tkinter import ttk, messagebox, filedialog, simpledialog
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None
    filedialog = None
    simpledialog = None

from models import Session
from config import get_default_session, load_session, load_session_or_default, save_session
from computations import compute_report, has_banker, round_row
from excel_export import export_excel
from gui_dialogs import RoundDialog
from csv_handler import export_rounds_to_csv, import_rounds_from_csv
from session import (
    add_player,
    add_round,
    find_round,
    import_rounds,
    player_name,
    remove_player,
    remove_round,
    rename_player,
    reset_game,
    set_banker,
    set_round_value,
)
from utils import default_export_name, format_amount

logger = logging.getLogger(__name__)


class BankerLedgerApp(ttk.Frame):
    """Main application window"""

    def __init__(self, master: tk.Tk, session_path: Optional[str] = None):
        super().__init__(master, padding=8)
        self.master = master
        self.master.title("BankerLedger")
        self.master.geometry("1100x650")
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)

        self.session_path: Optional[str] = session_path
        self.session: Session = get_default_session()
        load_error = None
        if session_path:
            self.session, load_error = load_session_or_default(session_path)
            if load_error is not None:
                # keep the unreadable file untouched on close
                self.session_path = None

        self._build_menu()
        self._build_ui()
        self.refresh_all()
        if load_error is not None:
            messagebox.showerror(
                "Open failed",
                f"Could not read {session_path}; starting a new session.\n\n{load_error}",
            )

    # ---------- Menu ----------
    def _build_menu(self):
        """Build application menu bar"""
        menubar = tk.Menu(self.master)
        filem = tk.Menu(menubar, tearoff=0)
        filem.add_command(label="New", command=self.new_session)
        filem.add_command(label="Open…", command=self.open_session)
        filem.add_command(label="Save", command=self.save_session)
        filem.add_command(label="Save As…", command=self.save_as_session)
        filem.add_separator()
        filem.add_command(label="Export CSV…", command=self.export_csv_dialog)
        filem.add_command(label="Import CSV…", command=self.import_csv_dialog)
        filem.add_separator()
        filem.add_command(label="Export Excel…", command=self.export_excel_dialog)
        filem.add_separator()
        filem.add_command(label="Reset game", command=self.reset_game)
        filem.add_command(label="Exit", command=self.close)
        menubar.add_cascade(label="File", menu=filem)

        settingsm = tk.Menu(menubar, tearoff=0)
        settingsm.add_command(label="Money step…", command=self.edit_money_step)
        menubar.add_cascade(label="Settings", menu=settingsm)

        self.master.config(menu=menubar)

    # ---------- UI ----------
    def _build_ui(self):
        """Build main UI with tabs"""
        nb = ttk.Notebook(self)
        nb.grid(row=0, column=0, sticky="nsew")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self.tab_rounds = ttk.Frame(nb, padding=8)
        self.tab_players = ttk.Frame(nb, padding=8)
        self.tab_reports = ttk.Frame(nb, padding=8)

        nb.add(self.tab_rounds, text="Rounds")
        nb.add(self.tab_players, text="Players")
        nb.add(self.tab_reports, text="Reports")

        self._build_rounds_tab()
        self._build_players_tab()
        self._build_reports_tab()

    def _build_rounds_tab(self):
        """Build rounds tab; player columns are rebuilt on every refresh"""
        top = ttk.Frame(self.tab_rounds)
        top.grid(row=0, column=0, sticky="ew")
        self.tab_rounds.columnconfigure(0, weight=1)

        ttk.Button(top, text="Add round", command=self.add_round).pack(side="left", padx=3)
        ttk.Button(top, text="Edit", command=self.edit_selected_round).pack(side="left", padx=3)
        ttk.Button(top, text="Delete", command=self.delete_selected_round).pack(side="left", padx=3)

        ttk.Separator(self.tab_rounds, orient="horizontal").grid(row=1, column=0, sticky="ew", pady=6)

        self.round_tree = ttk.Treeview(self.tab_rounds, show="headings", height=18)
        self.round_tree.grid(row=2, column=0, sticky="nsew")
        self.round_tree.bind("<Double-1>", lambda _e: self.edit_selected_round())
        self.tab_rounds.rowconfigure(2, weight=1)

        yscroll = ttk.Scrollbar(self.tab_rounds, orient="vertical", command=self.round_tree.yview)
        self.round_tree.configure(yscroll=yscroll.set)
        yscroll.grid(row=2, column=1, sticky="ns")

    def _build_players_tab(self):
        """Build player management tab"""
        self.tab_players.columnconfigure(0, weight=1)
        frm = ttk.Frame(self.tab_players)
        frm.grid(row=0, column=0, sticky="nsew")

        ttk.Label(frm, text="Players:").grid(row=0, column=0, sticky="w")
        self.players_list = tk.Listbox(frm, height=18)
        self.players_list.grid(row=1, column=0, sticky="nsew", pady=6)
        frm.rowconfigure(1, weight=1)
        frm.columnconfigure(0, weight=1)

        controls = ttk.Frame(frm)
        controls.grid(row=2, column=0, sticky="ew")
        self.new_player_var = tk.StringVar()
        ttk.Entry(controls, textvariable=self.new_player_var, width=18).pack(side="left")
        ttk.Button(controls, text="Add", command=self.add_player).pack(side="left", padx=4)
        ttk.Button(controls, text="Rename Selected", command=self.rename_selected_player).pack(side="left", padx=4)
        ttk.Button(controls, text="Remove Selected", command=self.remove_selected_player).pack(side="left", padx=4)

        ttk.Label(frm,
                  text="Note: removing a player deletes their entries from every round; "
                       "rounds they banked lose their banker.").grid(row=3, column=0, sticky="w", pady=(8, 0))

    def _build_reports_tab(self):
        """Build reports tab"""
        self.tab_reports.columnconfigure(0, weight=1)

        ttk.Label(self.tab_reports, text="Balances:").grid(row=0, column=0, sticky="w")
        self.bal_tree = self._make_tree(self.tab_reports, ("player", "total"), [200, 140], row=1)

        ttk.Label(self.tab_reports, text="Who pays whom:").grid(row=2, column=0, sticky="w", pady=(10, 0))
        self.tr_tree = self._make_tree(self.tab_reports, ("from", "to", "amount"), [160, 160, 140], row=3)

        ttk.Label(self.tab_reports, text="By person:").grid(row=4, column=0, sticky="w", pady=(10, 0))
        self.person_tree = self._make_tree(
            self.tab_reports, ("person", "pay", "receive", "net"), [160, 140, 140, 140], row=5
        )

    @staticmethod
    def _make_tree(parent, cols, widths, row):
        tree = ttk.Treeview(parent, columns=cols, show="headings", height=7)
        for c, w in zip(cols, widths):
            tree.heading(c, text=c)
            tree.column(c, width=w, anchor="w")
        tree.grid(row=row, column=0, sticky="nsew", pady=4)
        parent.rowconfigure(row, weight=1)
        return tree

    # ---------- CRUD: Rounds ----------
    def add_round(self):
        """Add new round and open it for editing"""
        if not self.session.players:
            messagebox.showerror("No players", "Please add at least one player first.")
            return
        r = add_round(self.session)
        self.refresh_all()
        self._edit_round(r.id)

    def _selected_round_id(self, action: str) -> Optional[str]:
        sel = self.round_tree.selection()
        if not sel:
            messagebox.showinfo(action, "Select a round row first.")
            return None
        return sel[0]

    def edit_selected_round(self):
        """Edit selected round"""
        rid = self._selected_round_id("Edit")
        if rid:
            self._edit_round(rid)

    def _edit_round(self, round_id: str):
        r = find_round(self.session, round_id)
        if r is None:
            return
        index = self.session.rounds.index(r) + 1
        dlg = RoundDialog(self.master, self.session, r, index)
        self.master.wait_window(dlg)
        if dlg.result:
            banker_id, values = dlg.result
            set_banker(self.session, round_id, banker_id)
            for pid, v in values.items():
                set_round_value(self.session, round_id, pid, v)
            self.refresh_all()

    def delete_selected_round(self):
        """Delete selected round"""
        rid = self._selected_round_id("Delete")
        if rid and messagebox.askyesno("Delete", "Delete selected round?"):
            remove_round(self.session, rid)
            self.refresh_all()

    # ---------- CRUD: Players ----------
    def add_player(self):
        """Add new player"""
        add_player(self.session, self.new_player_var.get().strip() or None)
        self.new_player_var.set("")
        self.refresh_all()

    def _selected_player(self):
        sel = self.players_list.curselection()
        if not sel:
            return None
        return self.session.players[sel[0]]

    def rename_selected_player(self):
        """Rename selected player"""
        p = self._selected_player()
        if p is None:
            return
        name = simpledialog.askstring("Rename player", "New name:", initialvalue=p.name, parent=self.master)
        if name and name.strip():
            rename_player(self.session, p.id, name.strip())
            self.refresh_all()

    def remove_selected_player(self):
        """Remove selected player"""
        p = self._selected_player()
        if p is None:
            return
        if messagebox.askyesno("Remove player", f"Remove '{p.name}'? Their entries in every round are deleted."):
            remove_player(self.session, p.id)
            self.refresh_all()

    # ---------- Settings ----------
    def edit_money_step(self):
        """Change the increment used by the round editor"""
        step = simpledialog.askinteger(
            "Money step", "Step for the -/+ buttons:",
            initialvalue=self.session.money_step, minvalue=1, parent=self.master,
        )
        if step:
            self.session.money_step = step

    def reset_game(self):
        """Clear all rounds, keep players"""
        if messagebox.askyesno("Reset game", "Delete all rounds? Players are kept."):
            reset_game(self.session)
            self.refresh_all()

    # ---------- File ops ----------
    def new_session(self):
        """Create new session"""
        if messagebox.askyesno("New", "Start a new session (unsaved changes will be lost)?"):
            self.session = get_default_session()
            self.session_path = None
            self.refresh_all()

    def open_session(self):
        """Open session from file"""
        fp = filedialog.askopenfilename(
            title="Open session JSON",
            filetypes=[("Session JSON", "*.json"), ("All files", "*.*")]
        )
        if not fp:
            return
        try:
            self.session = load_session(fp)
            self.session_path = fp
            self.refresh_all()
        except Exception as ex:
            logger.exception("Open failed: %s", fp)
            messagebox.showerror("Open failed", str(ex))

    def save_session(self):
        """Save session to file"""
        if not self.session_path:
            return self.save_as_session()
        try:
            save_session(self.session, self.session_path)
            self.master.title(f"BankerLedger - {os.path.basename(self.session_path)}")
        except Exception as ex:
            logger.exception("Save failed: %s", self.session_path)
            messagebox.showerror("Save failed", str(ex))

    def close(self):
        """Save to the current session file, then quit"""
        if self.session_path:
            self.save_session()
        self.master.destroy()

    def save_as_session(self):
        """Save session to new file"""
        fp = filedialog.asksaveasfilename(
            title="Save session JSON",
            defaultextension=".json",
            filetypes=[("Session JSON", "*.json")]
        )
        if not fp:
            return
        self.session_path = fp
        self.save_session()

    def export_excel_dialog(self):
        """Export to Excel file"""
        if not self.session.rounds:
            messagebox.showinfo("Export", "No rounds to export.")
            return
        fp = filedialog.asksaveasfilename(
            title="Export Excel",
            initialfile=default_export_name(),
            defaultextension=".xlsx",
            filetypes=[("Excel Workbook", "*.xlsx")]
        )
        if not fp:
            return
        try:
            export_excel(self.session, fp)
            messagebox.showinfo("Export", f"Exported: {fp}")
        except Exception as ex:
            logger.exception("Excel export failed: %s", fp)
            messagebox.showerror("Export failed", str(ex))

    # ---------- Refresh ----------
    def refresh_all(self):
        """Refresh all UI elements"""
        self.refresh_rounds()
        self.refresh_players()
        self.refresh_reports()

    def refresh_rounds(self):
        """Refresh rounds tree view"""
        players = self.session.players
        cols = ["round", "banker"] + [p.id for p in players]
        self.round_tree.delete(*self.round_tree.get_children())
        self.round_tree.configure(columns=cols)
        self.round_tree.heading("round", text="#")
        self.round_tree.column("round", width=50, anchor="center")
        self.round_tree.heading("banker", text="banker")
        self.round_tree.column("banker", width=140, anchor="w")
        bankers = {r.banker_id for r in self.session.rounds}
        for p in players:
            self.round_tree.heading(p.id, text=f"{p.name} ♛" if p.id in bankers else p.name)
            self.round_tree.column(p.id, width=110, anchor="e")

        for i, r in enumerate(self.session.rounds, start=1):
            row = round_row(r, players)
            banker = player_name(players, r.banker_id) if has_banker(r, players) else "—"
            values = [i, banker] + [format_amount(row[p.id]) for p in players]
            self.round_tree.insert("", "end", iid=r.id, values=values)

    def refresh_players(self):
        """Refresh players list"""
        self.players_list.delete(0, tk.END)
        for p in self.session.players:
            self.players_list.insert(tk.END, p.name)

    def refresh_reports(self):
        """Recompute the whole settlement and refresh reports tab"""
        players = self.session.players
        report = compute_report(self.session)

        for tree in (self.bal_tree, self.tr_tree, self.person_tree):
            tree.delete(*tree.get_children())

        for p in players:
            self.bal_tree.insert("", "end", values=(p.name, format_amount(report.balances[p.id])))
        for t in report.transactions:
            self.tr_tree.insert("", "end", values=(
                player_name(players, t.from_id), player_name(players, t.to_id), format_amount(t.amount)
            ))
        for s in report.by_person:
            net = format_amount(s.net)
            self.person_tree.insert("", "end", values=(
                player_name(players, s.person_id),
                format_amount(s.pay),
                format_amount(s.receive),
                f"+{net}" if s.net > 0 else net,
            ))

    # ---------- CSV Import/Export ----------
    def export_csv_dialog(self):
        """Export round history to CSV file"""
        if not self.session.rounds:
            messagebox.showinfo("Export CSV", "No rounds to export.")
            return

        fp = filedialog.asksaveasfilename(
            title="Export Rounds to CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return

        try:
            export_rounds_to_csv(self.session.rounds, fp)
            messagebox.showinfo("Export CSV", f"Exported {len(self.session.rounds)} rounds to:\n{fp}")
        except Exception as ex:
            logger.exception("CSV export failed: %s", fp)
            messagebox.showerror("Export failed", str(ex))

    def import_csv_dialog(self):
        """Import round history from CSV file"""
        fp = filedialog.askopenfilename(
            title="Import Rounds from CSV",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return

        try:
            imported = import_rounds_from_csv(fp)
            if not imported:
                messagebox.showinfo("Import CSV", "No rounds found in CSV file.")
                return

            choice = messagebox.askyesnocancel(
                "Import CSV",
                f"Found {len(imported)} rounds in CSV.\n\n"
                "Yes: Append to current rounds\n"
                "No: Replace current rounds\n"
                "Cancel: Cancel import"
            )

            if choice is None:  # Cancel
                return
            import_rounds(self.session, imported, append=bool(choice))
            # rows for unknown players stay stale and are ignored by the engine
            self.refresh_all()
        except Exception as ex:
            logger.exception("CSV import failed: %s", fp)
            messagebox.showerror("Import failed", str(ex))
