"""
Match recaps and scouting blurbs from Gemini.

Calls run on a worker thread.  The timeout bounds both the wait here and the
client request itself, so a stalled call frees its worker.  A missing API key,
a network error, an empty response or a timeout all degrade to a fixed fallback
line, so callers never have to handle a failure here.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Callable

import google.generativeai as genai

import config
from models import MatchResult, Player, Team

logger = logging.getLogger(__name__)

MATCH_SUMMARY_FALLBACK = "The squads clashed in deep space. Results finalized."
MATCH_SUMMARY_EMPTY = "Match complete. Standard results recorded."
SCOUTING_REPORT_FALLBACK = "Standard league scouting report available."
SCOUTING_REPORT_EMPTY = "No intelligence available."

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="narrative")


def _extract_text(resp: Any) -> str:
    text = getattr(resp, "text", None)
    if isinstance(text, str):
        return text.strip()
    return ""


def _generate(prompt: str, timeout: float) -> str:
    genai.configure(api_key=config.GEMINI_API_KEY)
    model = genai.GenerativeModel(config.NARRATIVE_MODEL)
    return _extract_text(model.generate_content(prompt, request_options={"timeout": timeout}))


def _ask(
    prompt: str,
    fallback: str,
    empty: str,
    timeout: float | None,
    generate: Callable[[str, float], str],
) -> str:
    if not config.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set; using fallback narrative")
        return fallback
    limit = config.NARRATIVE_TIMEOUT if timeout is None else timeout
    future = _executor.submit(generate, prompt, limit)
    try:
        text = future.result(timeout=limit)
    except FutureTimeout:
        logger.warning("Narrative request timed out; using fallback")
        return fallback
    except Exception as exc:
        logger.warning("Narrative request failed: %s", exc, exc_info=True)
        return fallback
    return text or empty


def match_summary_prompt(result: MatchResult, home: Team, away: Team) -> str:
    winner = home.name if result.winner_id == home.id else away.name
    return (
        "Write a 2-sentence sports recap of a Subspace Trench Wars match.\n"
        f"Home: {home.name} ({result.home_score} points).\n"
        f"Away: {away.name} ({result.away_score} points).\n"
        f"Map: {result.map.name}. {result.counter_msg}\n"
        f"The winner was {winner}.\n"
        "Mention the intense ship combat and flag capping."
    )


def scouting_report_prompt(player: Player) -> str:
    return (
        "Generate a short scouting report (2 sentences) for a Subspace Trench Wars pilot "
        f"named {player.gamertag}.\n"
        f"Role: {player.role}. Stats: Aim {player.aim}, IQ {player.iq}, Potential {player.potential}.\n"
        "Make it sound like tournament Intel."
    )


def get_match_summary(
    result: MatchResult,
    home: Team,
    away: Team,
    timeout: float | None = None,
    generate: Callable[[str, float], str] = _generate,
) -> str:
    return _ask(match_summary_prompt(result, home, away), MATCH_SUMMARY_FALLBACK, MATCH_SUMMARY_EMPTY, timeout, generate)


def get_scouting_report(
    player: Player,
    timeout: float | None = None,
    generate: Callable[[str, float], str] = _generate,
) -> str:
    return _ask(scouting_report_prompt(player), SCOUTING_REPORT_FALLBACK, SCOUTING_REPORT_EMPTY, timeout, generate)
