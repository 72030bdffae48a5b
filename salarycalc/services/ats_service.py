"""Resume ATS compatibility scoring over already-extracted text.

Score weights (0–100):
    keyword coverage      40
    length (500 words)    20
    section completeness  20
    action verbs          10
    quantifiable results  10

Company comparisons report the share of each employer's keyword list that
appears in the resume.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salarycalc.config import settings
from salarycalc.models.db_models import AtsCheck
from salarycalc.models.schemas import (
    AtsCheckResponse,
    AtsHistoryItem,
    CompanyComparisons,
    DetailedAnalysis,
    MatchScore,
)
from salarycalc.utils.helpers import round_half_up

logger = logging.getLogger(__name__)

ATS_KEYWORDS: tuple[str, ...] = (
    "skills", "experience", "education", "certification", "achievement",
    "leadership", "project", "team", "communication", "problem solving",
    "analytical", "technical", "professional", "bachelor", "master",
    "degree", "certified", "proficient", "expert", "knowledge",
    "responsibility", "accomplishment", "result", "improve", "increase",
    "develop", "manage", "implement", "create", "design", "build",
    "javascript", "python", "java", "react", "node", "sql", "database",
    "api", "rest", "git", "agile", "scrum", "devops", "cloud", "aws",
)

GOLDMAN_SACHS_KEYWORDS: tuple[str, ...] = (
    "finance", "financial", "analytics", "risk", "trading", "investment",
    "quantitative", "modeling", "derivatives", "portfolio", "compliance",
    "regulatory", "excel", "vba", "sql", "python", "r", "statistics",
    "mba", "cfa", "leadership", "client", "stakeholder", "strategy",
)

GOOGLE_KEYWORDS: tuple[str, ...] = (
    "algorithm", "data structure", "system design", "distributed systems",
    "machine learning", "ai", "python", "java", "c++", "go", "javascript",
    "react", "angular", "kubernetes", "docker", "cloud", "gcp", "aws",
    "scalability", "performance", "optimization", "open source", "github",
    "leetcode", "competitive programming", "bachelor", "master", "phd",
)

ACTION_VERBS: tuple[str, ...] = (
    "achieved", "improved", "developed", "managed", "implemented", "created",
    "designed", "built", "led", "increased", "optimized", "delivered",
    "executed", "launched",
)

TECH_KEYWORDS: tuple[str, ...] = (
    "javascript", "python", "java", "react", "node", "sql", "database",
    "api", "git", "docker", "kubernetes", "aws", "cloud",
)

SECTION_PATTERNS: Dict[str, re.Pattern] = {
    "contact": re.compile(r"email|phone|contact|address", re.IGNORECASE),
    "experience": re.compile(r"experience|work|employment|position", re.IGNORECASE),
    "education": re.compile(r"education|degree|university|college|bachelor|master", re.IGNORECASE),
    "skills": re.compile(r"skills|technical|proficient|expert", re.IGNORECASE),
}

QUANTIFIABLE_PATTERN = re.compile(
    r"\d+%|\d+\s*(million|billion|thousand|k|m|b)|increased by|decreased by|reduced by|improved by",
    re.IGNORECASE,
)


def _matches(lower_text: str, keywords: Sequence[str]) -> List[str]:
    return [k for k in keywords if k in lower_text]


def _percent(part: int, whole: int) -> int:
    return min(round_half_up(part / whole * 100), 100) if whole else 0


def match_level(score: int) -> str:
    if score >= 70:
        return "Excellent Match"
    if score >= 50:
        return "Good Match"
    if score >= 30:
        return "Fair Match"
    return "Needs Improvement"


def analyse_resume(text: str, file_size: int = 0) -> AtsCheckResponse:
    """Score resume *text* and collect strengths, weaknesses and suggestions."""
    lower_text = text.lower()
    word_count = len(text.split())

    keyword_matches = len(_matches(lower_text, ATS_KEYWORDS))
    total_keywords = len(ATS_KEYWORDS)

    goldman_score = _percent(len(_matches(lower_text, GOLDMAN_SACHS_KEYWORDS)), len(GOLDMAN_SACHS_KEYWORDS))
    google_score = _percent(len(_matches(lower_text, GOOGLE_KEYWORDS)), len(GOOGLE_KEYWORDS))

    keyword_density = (
        round(keyword_matches / word_count * 1000, 2) if word_count else 0.0
    )

    sections = {name: bool(p.search(text)) for name, p in SECTION_PATTERNS.items()}
    section_completeness = _percent(sum(sections.values()), len(sections))

    found_verbs = _matches(lower_text, ACTION_VERBS)
    action_verb_usage = _percent(len(found_verbs), len(ACTION_VERBS))

    has_quantifiable = QUANTIFIABLE_PATTERN.search(text) is not None
    quantifiable_results = 100 if has_quantifiable else 0

    found_tech = _matches(lower_text, TECH_KEYWORDS)
    technical_skills = _percent(len(found_tech), len(TECH_KEYWORDS))

    score = round_half_up(
        keyword_matches / total_keywords * 40
        + min(word_count / 500, 1) * 20
        + section_completeness / 100 * 20
        + action_verb_usage / 100 * 10
        + quantifiable_results / 100 * 10
    )

    suggestions: list[str] = []
    strengths: list[str] = []
    weaknesses: list[str] = []

    if keyword_matches < total_keywords * 0.3:
        weaknesses.append("Low keyword density - add more relevant skills and keywords")
        suggestions.append("Include more industry-specific keywords and technical skills")
    else:
        strengths.append("Good keyword coverage")

    if word_count < 300:
        weaknesses.append("Resume is too short - may lack detail")
        suggestions.append("Expand on your experience and achievements")
    elif word_count > 1000:
        weaknesses.append("Resume is too long - ATS systems prefer concise resumes")
        suggestions.append("Condense your resume to 1-2 pages")
    else:
        strengths.append("Appropriate resume length")

    section_messages = {
        "contact": ("Missing contact information", "Add email and phone number",
                    "Contact information present"),
        "experience": ("Missing work experience section", "Add a detailed work experience section",
                       "Work experience section present"),
        "education": ("Missing education section", "Add your educational background",
                      "Education section present"),
        "skills": ("Missing skills section", "Add a dedicated skills section",
                   "Skills section present"),
    }
    for name, (weakness, suggestion, strength) in section_messages.items():
        if sections[name]:
            strengths.append(strength)
        else:
            weaknesses.append(weakness)
            suggestions.append(suggestion)

    if not found_verbs:
        weaknesses.append("No action verbs found")
        suggestions.append(
            "Use action verbs to describe achievements (e.g., achieved, improved, developed)"
        )
    elif len(found_verbs) < 3:
        suggestions.append("Use more action verbs to strengthen your achievements")
    else:
        strengths.append(f"Good use of action verbs ({len(found_verbs)} found)")

    if not has_quantifiable:
        weaknesses.append("Missing quantifiable results")
        suggestions.append(
            'Add numbers, percentages, and metrics to show impact (e.g., "increased revenue by 30%")'
        )
    else:
        strengths.append("Quantifiable results present")

    if technical_skills < 30:
        suggestions.append("Add more technical skills relevant to your field")
    else:
        strengths.append(f"Strong technical skills coverage ({len(found_tech)} skills found)")

    if goldman_score < 50:
        suggestions.append(
            "For Goldman Sachs: Add finance, analytics, risk management, and quantitative skills"
        )
    if google_score < 50:
        suggestions.append(
            "For Google: Emphasize algorithms, system design, distributed systems, and technical depth"
        )

    return AtsCheckResponse(
        score=score,
        suggestions=suggestions,
        strengths=strengths,
        weaknesses=weaknesses,
        keywordMatches=keyword_matches,
        totalKeywords=total_keywords,
        fileSize=file_size,
        wordCount=word_count,
        companyComparisons=CompanyComparisons(
            goldmanSachs=MatchScore(score=goldman_score, match=match_level(goldman_score)),
            google=MatchScore(score=google_score, match=match_level(google_score)),
        ),
        detailedAnalysis=DetailedAnalysis(
            keywordDensity=keyword_density,
            sectionCompleteness=section_completeness,
            actionVerbUsage=action_verb_usage,
            quantifiableResults=quantifiable_results,
            technicalSkills=technical_skills,
        ),
    )


# ── Persistence ───────────────────────────────────────────────────────────

async def save_check(
    session: AsyncSession,
    result: AtsCheckResponse,
    user_id: Optional[str] = None,
) -> AtsCheck:
    row = AtsCheck(
        user_id=user_id,
        score=result.score,
        keyword_matches=result.keywordMatches,
        total_keywords=result.totalKeywords,
        word_count=result.wordCount,
        file_size=result.fileSize,
        suggestions=result.suggestions,
        strengths=result.strengths,
        weaknesses=result.weaknesses,
        company_comparisons=result.companyComparisons.model_dump(),
        detailed_analysis=result.detailedAnalysis.model_dump(),
    )
    session.add(row)
    await session.flush()
    logger.info("Saved ATS check id=%s user_id=%s score=%s", row.id, user_id, row.score)
    return row


async def user_checks(
    session: AsyncSession,
    user_id: str,
    limit: int = settings.ATS_HISTORY_LIMIT,
) -> List[AtsHistoryItem]:
    result = await session.execute(
        select(AtsCheck)
        .where(AtsCheck.user_id == user_id)
        .order_by(AtsCheck.created_at.desc())
        .limit(limit)
    )
    return [
        AtsHistoryItem(
            id=row.id,
            createdAt=row.created_at,
            score=row.score,
            suggestions=row.suggestions,
            strengths=row.strengths,
            weaknesses=row.weaknesses,
            keywordMatches=row.keyword_matches,
            totalKeywords=row.total_keywords,
            fileSize=row.file_size,
            wordCount=row.word_count,
            companyComparisons=row.company_comparisons,
            detailedAnalysis=row.detailed_analysis,
        )
        for row in result.scalars().all()
    ]
