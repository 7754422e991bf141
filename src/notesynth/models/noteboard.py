"""Noteboard entries and visualization payloads.

Every payload is a tagged union member: noteboard entries are discriminated by
``kind`` and visualization payloads by ``viz_type``, so a stored bundle always
round-trips to the same static shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from notesynth.models.podcast import PodcastScript
from notesynth.models.source import new_id


class NoteboardKind(str, Enum):
    SUMMARY = "Overall Summary"
    KEY_PEOPLE = "Key People"
    QNA = "Key Q&A"
    VISUALIZATION = "Data Visualization"
    PODCAST = "Podcast"


class VisualizationType(str, Enum):
    WORD_CLOUD = "Word Cloud"
    BAR_CHART = "Bar Chart"
    PIE_CHART = "Pie Chart"
    CONCEPT_MAP = "Concept Map"
    SENTIMENT_ANALYSIS = "Sentiment Analysis"
    TIMELINE = "Timeline"
    NETWORK_GRAPH = "Network Graph"
    GEO_MAP = "Geographic Map"
    TOPIC_HEATMAP = "Topic Heatmap"
    BUBBLE_CHART = "Bubble Chart"


# --- Extraction shapes -------------------------------------------------------


class KeyPerson(BaseModel):
    name: str
    description: str


class QnaItem(BaseModel):
    question: str
    answer: str


class SuggestedVisualization(BaseModel):
    type: VisualizationType
    rationale: str


class NoteboardInsights(BaseModel):
    """Result of a full-noteboard extraction."""

    summary: str
    key_people: list[KeyPerson] = Field(default_factory=list)
    qna: list[QnaItem] = Field(default_factory=list)
    suggested_visualizations: list[SuggestedVisualization] = Field(default_factory=list)


class WordCloudItem(BaseModel):
    text: str
    value: float


class SeriesItem(BaseModel):
    """A named value, shared by bar and pie charts."""

    name: str
    value: float


class ConceptNode(BaseModel):
    name: str
    children: list[str] = Field(default_factory=list)


class ConceptMapData(BaseModel):
    center: str
    nodes: list[ConceptNode] = Field(default_factory=list)


class SentimentData(BaseModel):
    sentiment: Literal["Positive", "Negative", "Neutral"]
    score: float = Field(ge=-1.0, le=1.0)


class TimelineEvent(BaseModel):
    date: str
    description: str


class GraphNode(BaseModel):
    id: str
    label: str


class GraphLink(BaseModel):
    source: str
    target: str


class NetworkGraphData(BaseModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)


class GeoMapData(BaseModel):
    countryCodes: list[str] = Field(default_factory=list)

    @field_validator("countryCodes")
    @classmethod
    def _alpha2(cls, codes: list[str]) -> list[str]:
        normalized = [c.strip().upper() for c in codes]
        bad = [c for c in normalized if len(c) != 2 or not c.isalpha()]
        if bad:
            raise ValueError(f"not ISO 3166-1 alpha-2 codes: {bad}")
        return normalized


class TopicHeatmapData(BaseModel):
    sources: list[str]
    topics: list[str]
    matrix: list[list[float]]

    @model_validator(mode="after")
    def _matrix_dimensions(self) -> TopicHeatmapData:
        if len(self.matrix) != len(self.sources):
            raise ValueError(
                f"matrix has {len(self.matrix)} rows for {len(self.sources)} sources"
            )
        for row in self.matrix:
            if len(row) != len(self.topics):
                raise ValueError(
                    f"matrix row has {len(row)} columns for {len(self.topics)} topics"
                )
        return self


class BubbleChartItem(BaseModel):
    name: str
    value: float
    category: str


# --- Visualization payloads (discriminated by viz_type) ----------------------


class WordCloudChart(BaseModel):
    viz_type: Literal[VisualizationType.WORD_CLOUD] = VisualizationType.WORD_CLOUD
    data: list[WordCloudItem]


class BarChart(BaseModel):
    viz_type: Literal[VisualizationType.BAR_CHART] = VisualizationType.BAR_CHART
    data: list[SeriesItem]


class PieChart(BaseModel):
    viz_type: Literal[VisualizationType.PIE_CHART] = VisualizationType.PIE_CHART
    data: list[SeriesItem]


class ConceptMapChart(BaseModel):
    viz_type: Literal[VisualizationType.CONCEPT_MAP] = VisualizationType.CONCEPT_MAP
    data: ConceptMapData


class SentimentChart(BaseModel):
    viz_type: Literal[VisualizationType.SENTIMENT_ANALYSIS] = VisualizationType.SENTIMENT_ANALYSIS
    data: SentimentData


class TimelineChart(BaseModel):
    viz_type: Literal[VisualizationType.TIMELINE] = VisualizationType.TIMELINE
    data: list[TimelineEvent]


class NetworkGraphChart(BaseModel):
    viz_type: Literal[VisualizationType.NETWORK_GRAPH] = VisualizationType.NETWORK_GRAPH
    data: NetworkGraphData


class GeoMapChart(BaseModel):
    viz_type: Literal[VisualizationType.GEO_MAP] = VisualizationType.GEO_MAP
    data: GeoMapData


class TopicHeatmapChart(BaseModel):
    viz_type: Literal[VisualizationType.TOPIC_HEATMAP] = VisualizationType.TOPIC_HEATMAP
    data: TopicHeatmapData


class BubbleChart(BaseModel):
    viz_type: Literal[VisualizationType.BUBBLE_CHART] = VisualizationType.BUBBLE_CHART
    data: list[BubbleChartItem]


Visualization = Annotated[
    Union[
        WordCloudChart,
        BarChart,
        PieChart,
        ConceptMapChart,
        SentimentChart,
        TimelineChart,
        NetworkGraphChart,
        GeoMapChart,
        TopicHeatmapChart,
        BubbleChart,
    ],
    Field(discriminator="viz_type"),
]

CHART_MODELS: dict[VisualizationType, type[BaseModel]] = {
    VisualizationType.WORD_CLOUD: WordCloudChart,
    VisualizationType.BAR_CHART: BarChart,
    VisualizationType.PIE_CHART: PieChart,
    VisualizationType.CONCEPT_MAP: ConceptMapChart,
    VisualizationType.SENTIMENT_ANALYSIS: SentimentChart,
    VisualizationType.TIMELINE: TimelineChart,
    VisualizationType.NETWORK_GRAPH: NetworkGraphChart,
    VisualizationType.GEO_MAP: GeoMapChart,
    VisualizationType.TOPIC_HEATMAP: TopicHeatmapChart,
    VisualizationType.BUBBLE_CHART: BubbleChart,
}


def data_shape(viz_type: VisualizationType) -> type:
    """Return the response shape the backend must satisfy for ``viz_type``."""
    return CHART_MODELS[viz_type].model_fields["data"].annotation


# --- Noteboard entries (discriminated by kind) --------------------------------


class SummaryEntry(BaseModel):
    id: str = Field(default_factory=lambda: new_id("nb-summary"))
    kind: Literal[NoteboardKind.SUMMARY] = NoteboardKind.SUMMARY
    title: str = NoteboardKind.SUMMARY.value
    payload: str


class KeyPeopleEntry(BaseModel):
    id: str = Field(default_factory=lambda: new_id("nb-people"))
    kind: Literal[NoteboardKind.KEY_PEOPLE] = NoteboardKind.KEY_PEOPLE
    title: str = NoteboardKind.KEY_PEOPLE.value
    payload: list[KeyPerson]


class QnaEntry(BaseModel):
    id: str = Field(default_factory=lambda: new_id("nb-qna"))
    kind: Literal[NoteboardKind.QNA] = NoteboardKind.QNA
    title: str = NoteboardKind.QNA.value
    payload: list[QnaItem]


class VisualizationEntry(BaseModel):
    id: str = Field(default_factory=lambda: new_id("nb-viz"))
    kind: Literal[NoteboardKind.VISUALIZATION] = NoteboardKind.VISUALIZATION
    title: str
    payload: Visualization

    @property
    def viz_type(self) -> VisualizationType:
        return self.payload.viz_type


class PodcastEntry(BaseModel):
    id: str = Field(default_factory=lambda: new_id("nb-podcast"))
    kind: Literal[NoteboardKind.PODCAST] = NoteboardKind.PODCAST
    title: str
    payload: PodcastScript


NoteboardEntry = Annotated[
    Union[SummaryEntry, KeyPeopleEntry, QnaEntry, VisualizationEntry, PodcastEntry],
    Field(discriminator="kind"),
]
