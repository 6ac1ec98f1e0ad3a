import os
from datetime import date

from geodle.round import DailyRound, GuessFeedback

CLOSE_DISTANCE_KM = float(os.getenv("GEODLE_CLOSE_DISTANCE_KM", "1000"))

CORRECT = "🟩"
CLOSE = "🟨"
SAME_CONTINENT = "🟧"
FAR = "🟥"

SHARE_FOOTER = "geodle.app"


def result_glyph(feedback: GuessFeedback, answer_name: str) -> str:
    if feedback.country.name == answer_name:
        return CORRECT
    if feedback.distance < CLOSE_DISTANCE_KM:
        return CLOSE
    if feedback.continent:
        return SAME_CONTINENT
    return FAR


def share_text(daily_round: DailyRound, day: date | None = None) -> str:
    """
    Spoiler-free summary of a round, for pasting elsewhere. Glyphs and line
    order have to stay the same so results can be compared between players.
    """
    day = day or date.today()
    answer_name = daily_round.target.name

    glyphs = "".join(result_glyph(g, answer_name) for g in daily_round.guesses)
    arrows = "".join(g.direction.arrow for g in daily_round.guesses)
    score = daily_round.guess_count if daily_round.won else "X"

    return (
        f"🌍 Geodle {day.month}/{day.day}/{day.year}\n"
        f"{glyphs} {score}/{daily_round.max_guesses}\n"
        f"{arrows}\n"
        f"\n"
        f"{SHARE_FOOTER}"
    )
