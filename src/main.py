import os

from nicegui import ui

from game import game_ui

STORAGE_SECRET = os.getenv("STORAGE_SECRET", "geodle")


@ui.page("/")
async def index():
    await game_ui.content()


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(title="Geodle", storage_secret=STORAGE_SECRET)
