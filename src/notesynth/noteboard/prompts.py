"""Extraction prompts for noteboard artifacts."""

from __future__ import annotations

from notesynth.models.noteboard import VisualizationType

NOTEBOARD_PROMPT = """Based on the following documents, generate a JSON object containing:
1. "summary": an overall summary of all documents combined.
2. "key_people": a list of key people or entities mentioned, each with a "name" and a brief "description".
3. "qna": a list of 3 potential questions a user might ask, each with a "question" and an "answer".
4. "suggested_visualizations": the most insightful visualization types for these documents, chosen from this list: [{viz_types}]. For each suggestion, provide a "type" and a brief "rationale" explaining why it's a good fit.

DOCUMENTS:
{documents}"""

PODCAST_PROMPT = """You are a podcast script writer. Based on the provided documents, write a \
short, engaging podcast episode. The podcast should have a catchy "title" and a "script" \
with at least two distinct speakers (e.g. "Host", "Expert", or named characters). The \
script is an array of objects, each with a "speaker" and their "line".

DOCUMENTS:
{documents}"""

VIZ_PROMPTS: dict[VisualizationType, str] = {
    VisualizationType.WORD_CLOUD: (
        "From the provided text, extract the 30 most frequent and meaningful words "
        "(excluding common stop words). Return a JSON array of objects, each with "
        "'text' and 'value' (frequency)."
    ),
    VisualizationType.BAR_CHART: (
        "Identify the top 5-7 key topics, themes, or entities in the text and their "
        "relative prominence or frequency. Return a JSON array of objects with 'name' "
        "and 'value'."
    ),
    VisualizationType.PIE_CHART: (
        "Categorize the content into 3-5 main themes. Estimate the percentage of the "
        "text dedicated to each. Return a JSON array of objects with 'name' and "
        "'value' (percentage), ensuring values sum to 100."
    ),
    VisualizationType.CONCEPT_MAP: (
        "Create a concept map from the text. Identify ONE central concept and 4-5 key "
        "sub-concepts that branch from it. For each sub-concept, list 2-3 related "
        "ideas. Return a single JSON object with a 'center' (string) and 'nodes' "
        "(array of objects with 'name' and 'children' array)."
    ),
    VisualizationType.SENTIMENT_ANALYSIS: (
        "Analyze the overall sentiment of the text. Return a single JSON object with "
        "'sentiment' ('Positive', 'Negative', or 'Neutral') and a numeric 'score' from "
        "-1.0 (very negative) to 1.0 (very positive)."
    ),
    VisualizationType.TIMELINE: (
        "Create a chronological timeline of the most important events from the text. "
        "Return a JSON array of objects, each with a 'date' and a 'description'."
    ),
    VisualizationType.NETWORK_GRAPH: (
        "Identify key entities (people, organizations, concepts) and their "
        "relationships from the text. Return a JSON object with 'nodes' (an array of "
        "objects with 'id' and 'label') and 'links' (an array of objects with 'source' "
        "and 'target' IDs). Limit to the 10 most important nodes."
    ),
    VisualizationType.GEO_MAP: (
        "From the text, list all countries mentioned. Return a JSON object containing a "
        "single key 'countryCodes' which is an array of the two-letter ISO 3166-1 "
        'alpha-2 codes for each country (e.g. ["US", "DE", "JP"]).'
    ),
    VisualizationType.TOPIC_HEATMAP: (
        "Analyze the content of the following documents. Identify the 5 most prominent "
        "shared topics. Then, for each document, rate the prevalence of each topic on a "
        "scale from 0 to 10. The document titles are: {titles}. Return a JSON object "
        "with 'sources' (an array of the document titles), 'topics' (an array of the "
        "identified topic names), and 'matrix' (a 2D array of scores, where "
        "matrix[i][j] is the score for sources[i] and topics[j])."
    ),
    VisualizationType.BUBBLE_CHART: (
        "Categorize key entities or concepts from the text into 3-5 logical groups. "
        "Determine a relative size for each entity based on its importance or "
        "frequency. Return a JSON array of objects, each with 'name', 'value' (for "
        "size), and 'category' (for color/grouping)."
    ),
}


def noteboard_prompt(documents: str) -> str:
    viz_types = ", ".join(v.value for v in VisualizationType)
    return NOTEBOARD_PROMPT.format(viz_types=viz_types, documents=documents)


def visualization_prompt(
    viz_type: VisualizationType, documents: str, titles: list[str]
) -> str:
    instructions = VIZ_PROMPTS[viz_type]
    if viz_type is VisualizationType.TOPIC_HEATMAP:
        instructions = instructions.format(titles=", ".join(titles))
    return f"{instructions}\n\nDOCUMENTS:\n{documents}"


def podcast_prompt(documents: str) -> str:
    return PODCAST_PROMPT.format(documents=documents)
