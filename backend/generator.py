# generator.py
# ContentBundle -> Itinerary via one chat call + the text parser

import logging
from models import ContentBundle, Itinerary
from providers.openai import OpenAIClient
from itinerary_parser import extract_title, parse_itinerary

log = logging.getLogger("cliptotrip.generator")

SYSTEM_PROMPT = (
    "You are a professional travel planner. Create detailed, practical travel itineraries "
    "based on video content analysis. Include specific activities, timing, locations, and "
    "helpful tips."
)

FORMAT_HINT = """Use exactly this plain-text layout:
Title: <itinerary title>
Duration: <N> days
Day 1: <day title>
- <activity>
- <activity>
Day 2: <day title>
- <activity>
(and so on, at most 7 days, at most 4 activities per day)"""


def build_prompt(bundle: ContentBundle) -> str:
    activities = "\n".join(f"- {a}" for a in bundle.activities) or "(none)"
    return (
        f"Create a detailed travel itinerary for {bundle.location} based on this TikTok video.\n\n"
        f"Transcription: {bundle.transcription or '(none)'}\n"
        f"Caption: {bundle.caption or '(none)'}\n"
        f"Screen Text: {bundle.screenText or '(none)'}\n"
        f"Activities mentioned:\n{activities}\n\n"
        f"{FORMAT_HINT}"
    )


async def generate_itinerary(openai: OpenAIClient, bundle: ContentBundle, model: str) -> Itinerary:
    text = await openai.chat(
        [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(bundle)},
        ],
        model=model,
        temperature=0.8,
    )
    days, duration = parse_itinerary(text, bundle.location)
    title = extract_title(text, bundle.location)
    log.info("generated %s itinerary '%s' (%d days parsed)", duration, title, len(days))
    return Itinerary(title=title, location=bundle.location, duration=duration, days=days)
