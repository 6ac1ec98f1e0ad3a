import logging
import os
from functools import partial

from nicegui import ui

from game import get_store, init_repos
from game.daily import DailySession
from geodle.api_clients.countries import CountriesAPI
from geodle.country import Country, flag_emoji, format_population, load_offline_countries
from geodle.round import GuessFeedback
from geodle.storage import KeyValueStore

logger = logging.getLogger("game.game_ui")

# Use the bundled countryinfo data instead of fetching from REST Countries
OFFLINE = os.getenv("GEODLE_OFFLINE", "") not in ("", "0", "false")

correct_bg = "bg-green-500 "
similar_bg = "bg-yellow-500 "
incorrect_bg = "bg-red-500 "


async def load_countries() -> list[Country] | None:
    if OFFLINE:
        return load_offline_countries()

    api = CountriesAPI()
    try:
        return await api.all()
    finally:
        await api.close()


def result_text(session: DailySession) -> str:
    if session.round.won:
        return f"🎉 Found it in {session.round.guess_count}!"
    target = session.target
    return f"The answer was {flag_emoji(target.code)} {target.name}"


def feedback_classes(feedback: GuessFeedback, target: Country) -> str:
    """Card colour for a guess: green if it's the target, yellow if same continent"""
    if feedback.country.name == target.name:
        return correct_bg
    if feedback.continent:
        return similar_bg
    return incorrect_bg


async def content(store: KeyValueStore | None = None):
    with ui.column(align_items="center").classes("mx-auto p-4"):
        ui.label("🧭").classes("text-h4")
        ui.label("GEODLE").classes("text-h2")
        ui.label("The Daily Geography Challenge").classes("text-subtitle1")
        loading = ui.label("Loading atlas...").mark("loading")

    repos = init_repos(store or get_store())
    session = DailySession(repos["state_repo"], repos["stats_repo"])

    countries = await load_countries()
    if not countries or not await session.load(countries):
        # Nothing can be played without country data; stay on the loading screen
        logger.warning("Country data unavailable, today's round isn't ready")
        return
    loading.delete()

    daily_round = session.round
    target = session.target

    def is_guess_valid(guess: str) -> str | None:
        """
        Validates the given guess, either returning an error
        message if it's invalid, or None if it's valid.
        """
        country = session.pool.lookup(guess or "")
        if country is None:
            return "Not a valid country!"
        elif country.name in daily_round.guessed_names:
            return "Already guessed!"
        else:
            return None

    async def try_guess():
        """
        Validates an inputted guess and passes it into the guess handler
        if it's valid.
        """
        if guess_input.validate():
            val = guess_input.value
            guess_input.value = ""
            await session.handle_guess(val)
            stats_bar.refresh()

    async def pick_suggestion(name: str):
        guess_input.value = ""
        await session.handle_guess(name)
        stats_bar.refresh()

    def show_suggestions(text: str):
        suggestion_list.clear()
        with suggestion_list:
            for country in session.suggestions(text):
                ui.button(
                    f"{flag_emoji(country.code)} {country.name}",
                    on_click=partial(pick_suggestion, country.name),
                ).props("flat no-caps").classes("w-full").mark("suggestion")

    def add_guess_row(feedback: GuessFeedback):
        country = feedback.country
        with guesses:
            with ui.card(align_items="center").classes(
                "w-full p-2 " + feedback_classes(feedback, target)
            ).mark("guess"):
                with ui.row().classes("w-full items-center justify-between no-wrap"):
                    ui.label(flag_emoji(country.code))
                    ui.label(country.name).classes("grow")
                    ui.label(f"{round(feedback.distance)} km")
                    ui.label(feedback.direction.arrow)

    @daily_round.guess_graded.subscribe
    def display_feedback(country: Country, feedback: GuessFeedback):
        """
        Displays the feedback for the latest guess
        """
        guess_display.text = f"{daily_round.guess_count}/{daily_round.max_guesses} guesses"
        add_guess_row(feedback)

    @daily_round.guess_error.subscribe
    def guess_error():
        ui.notify("There was an issue processing that guess. Try something else!")

    @daily_round.game_ended.subscribe
    def display_results(won: bool):
        show_results()

    def show_results():
        guess_input.disable()
        submit.disable()
        suggestion_list.clear()

        with results:
            results.clear()
            ui.label(result_text(session)).classes("text-h6")
            ui.button("📋 Share Result", on_click=copy_share)

    def copy_share():
        text = session.share()
        if text:
            ui.clipboard.write(text)
            ui.notify("✓ Copied!")

    with ui.column(align_items="center").classes("mx-auto p-4 w-full max-w-xl"):

        @ui.refreshable
        def stats_bar():
            with ui.row().classes("gap-8"):
                ui.label(f"🔥 {session.stats.streak}")
                ui.label(f"🏆 {session.stats.won}/{session.stats.played}")

        stats_bar()

        with ui.row().classes("gap-4"):
            for label, value in (
                ("Continent", target.continent or ""),
                ("Population", format_population(target.population)),
                ("First Letter", target.name[0]),
            ):
                with ui.card(align_items="center").classes("p-2"):
                    ui.label(label).classes("text-caption")
                    ui.label(value).mark(label.lower().replace(" ", "_"))

        guesses = ui.column().classes("w-full")
        for feedback in daily_round.guesses:
            add_guess_row(feedback)

        with ui.card(align_items="center").classes("mt-auto"):

            def on_input_change(e):
                guess_input.error = None
                show_suggestions(e.value or "")

            guess_display = ui.label(
                f"{daily_round.guess_count}/{daily_round.max_guesses} guesses"
            )
            guess_input = (
                ui.input(
                    label="Guess",
                    placeholder="Type a country name...",
                    validation=is_guess_valid,
                    on_change=on_input_change,
                )
                .without_auto_validation()
                .on("keydown.enter", try_guess)
            )
            suggestion_list = ui.column().classes("w-full gap-0")
            submit = ui.button("Submit", on_click=try_guess)

        results = ui.column(align_items="center")

        ui.label("A new country every day").classes("text-caption mt-4")

    if daily_round.is_over:
        show_results()
