"""
Prompts for Evidence Analysis

The analysis prompt asks for a fixed plain-text grammar (RECOMMENDATION,
CONFIDENCE, REASONING, KEY_FACTORS, SOURCE_ANALYSIS) that ResponseParser
understands.
"""

from __future__ import annotations

from typing import Sequence

from core.schemas import Claim, EvidenceItem


DEFAULT_MAX_EVIDENCE_CHARS = 2000
TRUNCATION_MARKER = " [...]"

ANALYSIS_PROMPT_TEMPLATE = """You are an expert fact-checker analyzing news content to answer a specific market prediction question.

**MARKET QUESTION**: "{question}"
{description_block}
**YOUR TASK**:
Analyze the following content from trusted news sources and provide a definitive YES or NO answer to the market question.

**ANALYSIS CRITERIA**:
1. Focus only on factual, verifiable information
2. Weight sources by credibility (BBC, Reuters = very high; others = high)
3. Look for direct evidence that supports or contradicts the market question
4. Consider recency of information
5. Identify any contradictions between sources

**CONTENT TO ANALYZE**:
Sources: {sources_used}

{content_sections}

**REQUIRED OUTPUT FORMAT** (respond exactly in this format):

RECOMMENDATION: [YES/NO/INCONCLUSIVE]
CONFIDENCE: [number between 0.0 and 1.0]
REASONING: [2-3 sentences explaining your decision based on the evidence]

KEY_FACTORS:
- [Most important supporting fact 1]
- [Most important supporting fact 2]
- [Most important supporting fact 3]

SOURCE_ANALYSIS:
{source_lines}

**IMPORTANT GUIDELINES**:
- Only answer YES if there is clear, recent evidence supporting the market question
- Only answer NO if there is clear, recent evidence contradicting the market question
- Answer INCONCLUSIVE if evidence is mixed, outdated, or insufficient
- Base confidence on strength and consistency of evidence across sources
- Be conservative with confidence scores - prefer lower confidence when uncertain"""

SECTION_TEMPLATE = """## Source {index}: {source}
**URL**: {url}
**Title**: {title}
**Content**: {content}
**Relevance Score**: {relevance:.0f}%
"""


def truncate_content(content: str, max_chars: int) -> str:
    """Cap content at max_chars, marking the cut."""
    if max_chars <= 0 or len(content) <= max_chars:
        return content
    return content[:max_chars].rstrip() + TRUNCATION_MARKER


def distinct_sources(evidence: Sequence[EvidenceItem]) -> list[str]:
    """Source names in first-seen order."""
    return list(dict.fromkeys(item.source for item in evidence))


def build_analysis_prompt(
    claim: Claim,
    evidence: Sequence[EvidenceItem],
    *,
    max_evidence_chars: int = DEFAULT_MAX_EVIDENCE_CHARS,
) -> str:
    """Render the analysis prompt for a claim and its evidence."""
    sections = "\n\n".join(
        SECTION_TEMPLATE.format(
            index=i,
            source=item.source,
            url=item.url,
            title=item.title,
            content=truncate_content(item.content, max_evidence_chars),
            relevance=item.relevance_score,
        )
        for i, item in enumerate(evidence, start=1)
    )
    sources = distinct_sources(evidence)
    description_block = (
        f"\n**MARKET DESCRIPTION**: {claim.description}\n" if claim.description else ""
    )

    return ANALYSIS_PROMPT_TEMPLATE.format(
        question=claim.text,
        description_block=description_block,
        sources_used=", ".join(sources),
        content_sections=sections,
        source_lines="\n".join(
            f"{source}: [YES/NO/NEUTRAL] - [Brief summary of this source's position]"
            for source in sources
        ),
    )
