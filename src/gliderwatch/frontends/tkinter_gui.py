"""Tkinter GUI frontend for the glider watch simulation."""

import os
import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Dict, Optional
from collections import deque

from ..core.compositor import to_ppm, write_ppm
from ..core.config import EngineConfig
from ..core.game import GameOfLife, initialize

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
FRAME_RATE = 60


class TkinterGliderWatchGUI:
    """Tkinter window that displays the engine's RGB frames.

    The GUI owns the running flag and hands it to the engine every frame.
    Keys: Space toggles running, ``n`` steps once, ``r`` reseeds,
    ``s`` saves the frame and Escape quits.
    """

    def __init__(self, master: tk.Tk, config: Optional[EngineConfig] = None) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            config: Engine configuration (defaults to a random 100x100 board)
        """
        self.master = master
        self.config = config or EngineConfig()
        self.master.title("Game of life")
        self.master.configure(bg="#333333")

        # Display parameters
        self.canvas_width = WINDOW_WIDTH
        self.canvas_height = WINDOW_HEIGHT
        self.scale_x = max(1, self.canvas_width // self.config.width)
        self.scale_y = max(1, self.canvas_height // self.config.height)

        self.game = GameOfLife.from_config(self.config)

        # GUI state
        self.running = True
        self.step_requested = False
        self.frame_rate = FRAME_RATE
        self.update_interval = 1000 // self.frame_rate

        # Kept referenced so Tk doesn't garbage collect the displayed frame
        self.frame_image: Optional[tk.PhotoImage] = None
        self.frame_times: deque = deque(maxlen=30)

        self.setup_ui()
        self.bind_keys()
        self.draw_frame(self.game.render())

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)
        self._create_control_buttons(control_frame)

        self.canvas = tk.Canvas(
            self.master,
            width=self.canvas_width,
            height=self.canvas_height,
            bg="white",
            highlightthickness=0,
        )
        self.canvas.pack()
        self.image_item = self.canvas.create_image(0, 0, anchor=tk.NW)

        stats_frame = tk.Frame(self.master, bg="#333333")
        stats_frame.pack(fill=tk.X, pady=3)
        self._create_statistics_display(stats_frame)

    def _create_control_buttons(self, parent: tk.Frame) -> None:
        """Create the main control buttons."""
        self.toggle_btn = tk.Button(
            parent,
            text="Pause",
            command=self.toggle_running,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.toggle_btn.pack(side=tk.LEFT, padx=3)

        self.step_btn = tk.Button(
            parent,
            text="Step",
            command=self.request_step,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.step_btn.pack(side=tk.LEFT, padx=3)

        self.reset_btn = tk.Button(
            parent,
            text="Reset",
            command=self.reset_board,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.reset_btn.pack(side=tk.LEFT, padx=3)

        self.save_btn = tk.Button(
            parent,
            text="Save Frame",
            command=self.save_frame,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.save_btn.pack(side=tk.LEFT, padx=3)

    def _create_statistics_display(self, parent: tk.Frame) -> None:
        """Create the statistics labels."""
        self.stats_labels: Dict[str, tk.Label] = {}
        for stat in ["Running", "Generation", "Population", "Glider Cells", "FPS"]:
            label = tk.Label(
                parent,
                text=f"{stat}: ",
                bg="#333333",
                fg="white",
                font=("Arial", 9),
                anchor="w",
            )
            label.pack(side=tk.LEFT, padx=6)
            self.stats_labels[stat] = label

    def bind_keys(self) -> None:
        """Bind keyboard shortcuts."""
        self.master.bind("<space>", lambda event: self.toggle_running())
        self.master.bind("n", lambda event: self.request_step())
        self.master.bind("r", lambda event: self.reset_board())
        self.master.bind("s", lambda event: self.save_frame())
        self.master.bind("<Escape>", lambda event: self.quit())

    def toggle_running(self) -> None:
        """Toggle whether the simulation advances every frame."""
        self.running = not self.running
        self.toggle_btn.config(text="Pause" if self.running else "Run")

    def request_step(self) -> None:
        """Advance exactly one generation on the next frame."""
        self.step_requested = True

    def reset_board(self) -> None:
        """Restart from a fresh random board."""
        self.game.reset(initialize(self.config.width, self.config.height, self.config.fill_probability))
        self.draw_frame(self.game.render())

    def save_frame(self) -> None:
        """Save the current frame as a PPM image."""
        filename = filedialog.asksaveasfilename(
            title="Save Frame",
            defaultextension=".ppm",
            filetypes=[("PPM images", "*.ppm"), ("All files", "*.*")],
        )

        if filename:
            try:
                board = self.game.board
                write_ppm(filename, board.width, board.height, self.game.render())

                messagebox.showinfo("Saved", f"Frame saved to {os.path.basename(filename)}")
            except Exception as e:
                messagebox.showerror("Error", f"Failed to save frame: {str(e)}")

    def quit(self) -> None:
        """Close the window."""
        self.master.quit()
        self.master.destroy()

    def draw_frame(self, buffer: bytes) -> None:
        """Show an RGB8 frame buffer, scaled to the canvas."""
        board = self.game.board
        image = tk.PhotoImage(master=self.master, data=to_ppm(board.width, board.height, buffer), format="PPM")
        self.frame_image = image.zoom(self.scale_x, self.scale_y)
        self.canvas.itemconfig(self.image_item, image=self.frame_image)

    def update_statistics(self) -> None:
        """Update the statistics display."""
        stats = self.game.get_statistics()

        current_time = self.master.tk.call("clock", "milliseconds")
        self.frame_times.append(current_time)
        if len(self.frame_times) > 1 and self.frame_times[-1] > self.frame_times[0]:
            fps = 1000 * (len(self.frame_times) - 1) / (self.frame_times[-1] - self.frame_times[0])
        else:
            fps = 0

        display_stats = {
            "Running": "Yes" if self.running else "No",
            "Generation": str(stats["generation"]),
            "Population": f"{stats['population_density']*100:.1f}%",
            "Glider Cells": str(stats["glider_cells"]),
            "FPS": f"{fps:.1f}",
        }

        for stat, value in display_stats.items():
            self.stats_labels[stat].config(text=f"{stat}: {value}")

    def frame(self) -> None:
        """Run one engine frame and display it."""
        should_step = self.running or self.step_requested
        self.step_requested = False

        self.draw_frame(self.game.tick(should_step))
        self.update_statistics()

    def update_loop(self) -> None:
        """Main update loop."""
        self.frame()
        self.master.after(self.update_interval, self.update_loop)


def main() -> None:
    """Main entry point for the Tkinter GUI."""
    import sys

    root = tk.Tk()
    root.resizable(False, False)

    test_mode = "--test" in sys.argv

    app = TkinterGliderWatchGUI(root)
    app.update_loop()

    if test_mode:
        print("Running in test mode...")

        def auto_exit() -> None:
            print(f"Test completed. Ran {app.game.generation} generations.")
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()


if __name__ == "__main__":
    main()
