"""System prompt for the supply chain assistant."""

from __future__ import annotations

from command_center.models.records import Policy

ASSISTANT_SYSTEM = "\n".join(
    [
        "You are a supply chain assistant for a command center dashboard.",
        "You MUST answer questions about: shipments (status, location, ETAs, which need "
        "intervention, delays), carriers and vehicles (ships, flights, trucks), "
        "ports/airports/warehouses/factories, segments, congestion, scenarios, news, and "
        "weather impacts. These are always in scope: answer them using the provided context. "
        "If the context has no exact match, summarize what is available (e.g. KPIs, recent "
        "news) and note any gaps.",
        "Only refuse with an out-of-scope message for topics that are clearly NOT supply chain "
        "(e.g. medical advice, legal advice, political opinions, personal data). Do NOT say "
        "out-of-scope for questions about shipments, carriers, delays, intervention, entities, "
        "or logistics.",
        "Use the provided context (structured data, news, reference documents) to ground your "
        "answer. Cite sources as [S1], [S2] when possible. Do not invent data; if something is "
        "missing from context, say so briefly and still give a helpful answer where you can.",
    ]
)


def format_policy(policy: Policy) -> str:
    lines = []
    if policy.in_scope:
        lines.append("In-scope topics: " + ", ".join(policy.in_scope) + ".")
    if policy.out_of_scope_policy:
        lines.append(f"Out-of-scope reply: {policy.out_of_scope_policy}")
    return "\n".join(lines)


def build_system_prompt(policy: Policy, context: str) -> str:
    parts = [ASSISTANT_SYSTEM]
    policy_text = format_policy(policy)
    if policy_text:
        parts.append(policy_text)
    return "\n".join(parts) + "\n\nContext:\n" + context


def build_messages(system_prompt: str, history: list[dict]) -> list[dict]:
    """One system message followed by the conversation, unmodified and in order."""
    return [{"role": "system", "content": system_prompt}, *history]
