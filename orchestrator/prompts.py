"""Prompt text for every model call made by the pipeline."""

import json

from models.search import PageSummary

DIRECT_SYSTEM_PROMPT = "\n".join(
    [
        "You are a highly precise research assistant.",
        "Answer based ONLY on your internal knowledge; you have no access to live web results.",
        "If you are not confident in the facts, say so explicitly instead of guessing.",
        "Be concise, professional, and do not speculate.",
    ]
)

SYNTHESIS_SYSTEM_PROMPT = "\n".join(
    [
        "You are a research assistant that answers strictly from the provided web page summaries.",
        "Use ONLY the information in the summaries; do not add facts from memory.",
        "Write a clear answer of 5 to 8 sentences.",
        "Refer to sources by their bracketed numbers, e.g. [1][2], when stating facts.",
        "If the summaries do not contain the answer, say plainly that the sources do not answer the question.",
        "Never invent facts, numbers, dates or URLs.",
    ]
)

SUMMARIZE_SYSTEM_PROMPT = "\n".join(
    [
        "You summarize web page text for a research assistant.",
        "Write a neutral, factual summary of 3 to 5 sentences.",
        "Keep concrete facts: names, numbers, prices, dates and versions.",
        "Ignore navigation, cookie banners, ads and boilerplate.",
        "Output only the summary text.",
    ]
)

REPAIR_SYSTEM_PROMPT = "\n".join(
    [
        "You are a strict JSON repair utility.",
        "Your ONLY output must be a single, valid JSON object that adheres to the provided schema.",
        "Do not include any preamble, explanations, or markdown code blocks (e.g., no ```json).",
        'Schema: { "answer": string, "sources": string[] }',
        "Constraint: 'sources' must be an array of valid URL strings.",
    ]
)


def build_summaries_block(page_summaries: list[PageSummary]) -> str:
    """Number each page summary so the model can cite it positionally."""
    lines = []
    for idx, page in enumerate(page_summaries, start=1):
        lines.append(f"[{idx}] URL: {page.url}")
        lines.append(f"Summary: {page.summary}")
        lines.append("")
    return "\n".join(lines).rstrip()


def build_synthesis_request(query: str, page_summaries: list[PageSummary]) -> str:
    return "\n\n".join(
        [
            f"Question: {query}",
            "Web page summaries:",
            build_summaries_block(page_summaries),
            "Answer the question using only these summaries.",
        ]
    )


def build_repair_request(draft: dict) -> str:
    return "\n\n".join(
        [
            "Repair and reformat the following input to match the schema exactly.",
            "Input to fix:",
            json.dumps(draft, ensure_ascii=False),
        ]
    )
