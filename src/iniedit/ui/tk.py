"""Tk front end for :class:`~iniedit.ui.core.EditorSession`.

One notebook tab per section, each holding a key/value grid.  The view
keeps no document state of its own: every state change emitted by the
session rebuilds all tabs from the snapshot.
"""

from __future__ import annotations

from pathlib import Path

try:  # pragma: no cover - tkinter availability depends on the env
    import tkinter as tk
    from tkinter import filedialog, messagebox, simpledialog, ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    filedialog = None  # type: ignore
    messagebox = None  # type: ignore
    simpledialog = None  # type: ignore
    ttk = None  # type: ignore

from ..document import DocumentSnapshot, SectionView
from .core import EditorSession

FILE_TYPES = [("INI files", "*.ini")]


class App:  # pragma: no cover - GUI interactions
    def __init__(self, master: tk.Misc | None = None, *, session: EditorSession | None = None) -> None:
        if tk is None:
            raise RuntimeError("tkinter is required for App")
        self.root = master if master is not None else tk.Tk()
        self.session = session or EditorSession()
        self._trees: dict[str, ttk.Treeview] = {}

        events = self.session.events
        events.on_state_changed.append(self.render)
        events.on_error.append(lambda msg: messagebox.showerror("Error", msg, parent=self.root))
        events.on_toast.append(self._toast)
        events.on_confirm.append(
            lambda title, msg: messagebox.askyesno(title, msg, parent=self.root)
        )
        events.on_question.append(
            lambda title, msg: messagebox.askyesnocancel(title, msg, parent=self.root)
        )

        self.root.geometry("800x600")
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self._build_menu()
        self._build_body()
        self.render(self.session.snapshot)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="Open…", command=self.on_open)
        file_menu.add_command(label="Save", command=self.on_save)
        file_menu.add_command(label="Save As…", command=self.on_save_as)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close)
        menubar.add_cascade(label="File", menu=file_menu)
        self.root.config(menu=menubar)

    def _build_body(self) -> None:
        bar = ttk.Frame(self.root)
        bar.pack(fill="x", padx=10, pady=(10, 0))
        ttk.Button(bar, text="Add Section", command=self.on_add_section).pack(side="left")
        self._notebook = ttk.Notebook(self.root)
        self._notebook.pack(fill="both", expand=True, padx=10, pady=10)

    def _build_tab(self, section: SectionView) -> None:
        frame = ttk.Frame(self._notebook, padding=10)
        buttons = ttk.Frame(frame)
        buttons.pack(fill="x", pady=(0, 5))
        ttk.Button(
            buttons, text="Add Item", command=lambda: self.on_add_key(section.name)
        ).pack(side="left", padx=(0, 10))
        ttk.Button(
            buttons, text="Delete Item", command=lambda: self.on_delete_key(section.name)
        ).pack(side="left", padx=(0, 10))
        ttk.Button(
            buttons,
            text="Delete Section",
            command=lambda: self.session.remove_section(section.name),
        ).pack(side="right")

        tree = ttk.Treeview(frame, columns=("key", "value"), show="headings")
        tree.heading("key", text="Key")
        tree.heading("value", text="Value")
        tree.column("key", width=200)
        tree.column("value", width=400)
        for key, value in section.entries:
            tree.insert("", "end", values=(key, value))
        tree.bind("<Double-1>", lambda _e: self.on_edit_value(section.name))
        tree.pack(fill="both", expand=True)

        self._trees[section.name] = tree
        self._notebook.add(frame, text=section.name or "(unnamed)")

    def render(self, snapshot: DocumentSnapshot) -> None:
        selected = self._selected_section()
        for tab in self._notebook.tabs():
            self._notebook.forget(tab)
        self._trees.clear()
        for section in snapshot:
            self._build_tab(section)
        names = [s.name for s in snapshot]
        if selected in names:
            self._notebook.select(names.index(selected))
        self.root.title(self.session.title)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _selected_section(self) -> str | None:
        try:
            index = self._notebook.index("current")
        except tk.TclError:
            return None
        names = list(self._trees)
        return names[index] if 0 <= index < len(names) else None

    def _selected_key(self, section: str) -> str | None:
        tree = self._trees.get(section)
        if tree is None:
            return None
        focus = tree.focus()
        if not focus:
            return None
        return tree.item(focus, "values")[0]

    def _toast(self, msg: str, level: str) -> None:
        if level == "error":
            messagebox.showerror("Error", msg, parent=self.root)
        else:
            messagebox.showinfo("Saved", msg, parent=self.root)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def on_open(self) -> None:
        path = filedialog.askopenfilename(filetypes=FILE_TYPES, parent=self.root)
        if path:
            self.session.open(path)

    def on_save(self) -> None:
        if self.session.needs_path:
            self.on_save_as()
            return
        self.session.save()

    def on_save_as(self) -> None:
        path = filedialog.asksaveasfilename(
            filetypes=FILE_TYPES, defaultextension=".ini", parent=self.root
        )
        if path:
            self.session.save_as(path)

    def on_add_section(self) -> None:
        name = simpledialog.askstring("Add Section", "Enter new section name:", parent=self.root)
        if self.session.add_section(name):
            self._notebook.select(len(self._trees) - 1)

    def on_add_key(self, section: str) -> None:
        key = simpledialog.askstring("Add Key", "Enter key name:", parent=self.root)
        if key is None or not key.strip():
            return
        value = simpledialog.askstring("Add Value", "Enter value:", parent=self.root)
        self.session.add_entry(section, key, value)

    def on_delete_key(self, section: str) -> None:
        key = self._selected_key(section)
        if key is not None:
            self.session.remove_entry(section, key)

    def on_edit_value(self, section: str) -> None:
        key = self._selected_key(section)
        if key is None:
            return
        current = self.session.editor.get(section, key, "")
        value = simpledialog.askstring(
            "Edit Value", f"{key} =", initialvalue=current, parent=self.root
        )
        if value is not None and value != current:
            self.session.set_value(section, key, value)

    def on_close(self) -> None:
        if self.session.confirm_close():
            self.root.destroy()


def launch(path: Path | str | None = None) -> None:  # pragma: no cover - GUI interactions
    """Open the editor window, loading *path* when given.

    An unusable *path* is reported in a dialog and the window opens empty.
    """
    if tk is None:
        raise RuntimeError("tkinter is required for GUI mode")
    root = tk.Tk()
    app = App(root)
    if path is not None:
        app.session.open(path)
    else:
        app.session.open_last()
    root.mainloop()


__all__ = ["App", "launch"]
