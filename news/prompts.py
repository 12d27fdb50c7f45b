"""Prompt text and response schema for LLM news generation."""

SYSTEM_PROMPT = """\
You are the newswire for a stock market simulation game. Write short, \
plausible financial news that moves one or more market sectors. Stay neutral \
in tone, invent company-agnostic events (policy changes, commodity shocks, \
earnings seasons, regulation, supply chains), and never mention that this is \
a game.
"""

USER_PROMPT = """\
Generate a realistic financial news headline and brief content for day {day} \
of a stock market simulation.
The news should affect one or more of these sectors: {sectors}.
Provide a sentiment impact score between -1.0 (very negative) and 1.0 \
(very positive), and list the affected sectors using the exact names above.
"""

# JSON schema for the structured response. Field names match what
# ``NewsGenerator`` reads from the payload.
NEWS_SCHEMA: dict = {
    "title": "market_news",
    "description": "A single financial news item for the simulated market.",
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "Headline, at most a dozen words.",
        },
        "content": {
            "type": "string",
            "description": "One or two sentences of body copy.",
        },
        "impact": {
            "type": "number",
            "description": "Sentiment impact from -1.0 (very negative) to 1.0 (very positive).",
        },
        "affectedSectors": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Sectors this news affects, chosen from the offered list.",
        },
    },
    "required": ["title", "content", "impact", "affectedSectors"],
}
