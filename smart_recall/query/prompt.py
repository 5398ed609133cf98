"""Prompt construction for fragment-based recall."""

from smart_recall.query.models import KnowledgeMatch

PROMPT_TEMPLATE = """You are a smart search assistant that helps users find information from incomplete or fragmented queries.

User's query: "{query}"

Available knowledge base content:
{context}

Task:
1. Analyze the user's query for fragments and incomplete information
2. If knowledge base content is available, find the most relevant matches
3. If no direct matches, suggest what the user might be looking for based on the fragments
4. Provide a helpful, natural response that reconstructs the missing information
5. If the query is too vague, ask clarifying questions

Respond in a helpful, conversational tone. Focus on being accurate and useful."""


def format_match(match: KnowledgeMatch) -> str:
    tags = ", ".join(match.tags) if match.tags else "none"
    return f"Title: {match.title}\nContent: {match.content}\nTags: {tags}\n---"


def build_prompt(query: str, matches: list[KnowledgeMatch]) -> str:
    """Build the instruction sent to the language model.

    Args:
        query: User query, included verbatim
        matches: Retrieved knowledge matches, rendered in order

    Returns:
        Prompt text
    """
    context = "\n".join(format_match(match) for match in matches)
    return PROMPT_TEMPLATE.format(query=query, context=context)
