"""
GUI for CalcStack Calculator
Tkinter keypad, display and history line driving a CalculatorSession
"""
import tkinter as tk
import json
import threading
import config
from database import Database
from history_manager import HistoryManager
from session import CalculatorSession

# (label, kind) rows of the keypad
KEYPAD = [
    [("MC", "memory"), ("MR", "memory"), ("MS", "memory"), ("M+", "memory"), ("M-", "memory")],
    [("sin", "function"), ("cos", "function"), ("tan", "function"), ("√", "function"), ("x²", "function")],
    [("π", "function"), ("e", "function"), ("C", "danger"), ("⌫", "normal"), ("÷", "operator")],
    [("7", "digit"), ("8", "digit"), ("9", "digit"), ("±", "normal"), ("×", "operator")],
    [("4", "digit"), ("5", "digit"), ("6", "digit"), ("→x", "memory"), ("-", "operator")],
    [("1", "digit"), ("2", "digit"), ("3", "digit"), ("x", "memory"), ("+", "operator")],
    [("0", "digit"), (".", "digit"), ("=", "equals")],
]


class CalcStackGUI:
    def __init__(self, root, session=None, lock=None):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        # Initialize components
        if session is None:
            self.db = Database()
            self.history_manager = HistoryManager(self.db)
            session = CalculatorSession(history_manager=self.history_manager)
        self.session = session
        # shared with the web API when it serves the same session
        self.lock = lock if lock is not None else threading.Lock()

        settings = self._load_settings()
        self.dark_mode: bool = settings.get("dark_mode", False)
        self.T: dict = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)
        self.refresh()
        self.root.after(config.GUI_REFRESH_MS, self._poll)

    # ── Settings persistence ─────────────────────────────────────────────
    def _load_settings(self):
        try:
            with open(config.SETTINGS_FILE, "r") as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}

    def _save_settings(self, data):
        existing = self._load_settings()
        existing.update(data)
        with open(config.SETTINGS_FILE, "w") as f:
            json.dump(existing, f, indent=2)

    def _toggle_dark_mode(self):
        """Persist dark_mode setting and rebuild the window."""
        self.dark_mode = not self.dark_mode
        self._save_settings({"dark_mode": self.dark_mode})
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self.create_widgets()
        self.refresh()

    def _button(self, parent, text, kind="normal"):
        T = self.T
        if kind == "equals":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "operator":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "function":
            bg, fg = T["btn_bg"], T["function_fg"]
        elif kind == "memory":
            bg, fg = T["btn_bg"], T["memory_fg"]
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=lambda: self.button_click(text),
            font=config.BUTTON_FONT, bg=bg, fg=fg,
            activebackground=T["display_bg"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2", highlightthickness=1,
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T
        display_frame = tk.Frame(self.root, bg=T["display_bg"])
        display_frame.pack(fill=tk.X, padx=6, pady=(6, 4))

        self.history_label = tk.Label(
            display_frame, text="0", font=config.HISTORY_FONT,
            bg=T["display_bg"], fg=T["history_fg"], anchor=tk.E, padx=10
        )
        self.history_label.pack(side=tk.TOP, fill=tk.X)

        self.display = tk.Label(
            display_frame, text="0", font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=10
        )
        self.display.pack(side=tk.TOP, fill=tk.X)

        self.memory_label = tk.Label(
            display_frame, text="", font=config.LABEL_FONT,
            bg=T["display_bg"], fg=T["memory_fg"], anchor=tk.W, padx=10
        )
        self.memory_label.pack(side=tk.TOP, fill=tk.X)

        # Variable name used by →x (store) and x (recall)
        var_frame = tk.Frame(self.root, bg=T["bg"])
        var_frame.pack(fill=tk.X, padx=6)
        tk.Label(var_frame, text="Variable:", font=config.LABEL_FONT,
                 bg=T["bg"], fg=T["btn_fg"]).pack(side=tk.LEFT)
        self.variable_var = tk.StringVar(value="x")
        tk.Entry(var_frame, textvariable=self.variable_var, width=8, font=config.LABEL_FONT,
                 bg=T["entry_bg"], fg=T["entry_fg"]).pack(side=tk.LEFT, padx=4)
        tk.Button(var_frame, text="☾", command=self._toggle_dark_mode, relief=tk.FLAT,
                  bg=T["bg"], fg=T["btn_fg"], bd=0).pack(side=tk.RIGHT)

        keypad = tk.Frame(self.root, bg=T["bg"])
        keypad.pack(fill=tk.BOTH, expand=True, padx=6, pady=6)
        for r, row in enumerate(KEYPAD):
            keypad.rowconfigure(r, weight=1)
            col = 0
            for text, kind in row:
                span = 3 if text == "=" else 1
                self._button(keypad, text, kind).grid(
                    row=r, column=col, columnspan=span, sticky="nsew", padx=2, pady=2)
                col += span
        for c in range(5):
            keypad.columnconfigure(c, weight=1)

    def button_click(self, button):
        """Handle keypad buttons"""
        with self.lock:
            self._press(button)
        self.refresh()

    def _press(self, button):
        session = self.session
        if button.isdigit():
            session.enter_digit(button)
        elif button == ".":
            session.decimal()
        elif button == "±":
            session.toggle_sign()
        elif button == "C":
            session.clear()
        elif button == "⌫":
            session.undo()
        elif button in ("MC", "MR", "MS", "M+", "M-"):
            session.memory_operate(button)
        elif button == "→x":
            name = self.variable_var.get().strip()
            if name:
                session.set_variable(name)
        elif button == "x":
            name = self.variable_var.get().strip()
            if name:
                session.recall_variable(name)
        else:
            session.operate(button)

    def on_key_press(self, event):
        """Handle keyboard input"""
        if isinstance(event.widget, tk.Entry):
            return
        key = event.char
        if key and key in '0123456789.+-=':
            self.button_click(key)
        elif key == '*':
            self.button_click('×')
        elif key == '/':
            self.button_click('÷')
        elif key in ('\r', '\n'):
            self.button_click('=')
        elif event.keysym == 'BackSpace':
            self.button_click('⌫')
        elif event.keysym == 'Escape':
            self.button_click('C')

    def refresh(self):
        """Update display, history and memory indicator"""
        with self.lock:
            display, history = self.session.display, self.session.history
            memory = self.session.memory
        self.display.config(text=display)
        self.history_label.config(text=history)
        self.memory_label.config(text=f"M = {memory:g}" if memory else "")

    def _poll(self):
        """Pick up presses made through the web API"""
        if self.root.winfo_exists():
            self.refresh()
            self.root.after(config.GUI_REFRESH_MS, self._poll)
