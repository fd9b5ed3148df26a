"""Entry point: glues pystray (daemon thread) with the tkinter date picker (main thread)."""

import logging
import threading

from calendar_window import DatePickerWindow
from icon_gen import create_icon_image
from tray_icon import create_tray


def main() -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        level=logging.INFO)

    win = DatePickerWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        win.root.after(0, win.toggle)

    def on_today() -> None:
        win.root.after(0, win.go_today)

    def on_settings() -> None:
        win.root.after(0, win.open_settings)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            win.root.destroy()
        win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_today=on_today, on_settings=on_settings)

    # Run pystray in a daemon thread so it doesn't block tkinter
    threading.Thread(target=tray.run, daemon=True).start()

    win.root.mainloop()


if __name__ == "__main__":
    main()
