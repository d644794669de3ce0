# Admission Prediction Prompts
# ============================
# Each revision of the counselor instructions is a named template paired with
# the reasoning shape it asks for. One template is selected at startup.

from dataclasses import dataclass
from typing import Dict, List, Optional

from models import ReasoningStyle, TemplateName
from schemas import StudentProfile

CHANCE_FLOOR = 5
CHANCE_CEILING = 70

NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"
NONE_LISTED = "None"


@dataclass(frozen=True)
class PromptTemplate:
    name: TemplateName
    instructions: str
    reasoning_style: ReasoningStyle


PLAIN_INSTRUCTIONS = """
You are an expert college admissions counselor. Based on the following student profile, predict the admission chances for each university in the target list. For each prediction, provide a percentage chance and a brief, two-sentence reasoning.
"""

STRUCTURED_INSTRUCTIONS = """
You are an expert college admissions counselor. Based on the following student profile, predict the admission chances for each university in the target list.

For each university, provide a percentage chance and a reasoning split into exactly three parts:
- strengths: what in the profile helps the application at this school
- weaknesses: what in the profile hurts the application at this school
- advice: one concrete step the student could take to improve their chances
"""

GPA_TREND_INSTRUCTIONS = """
You are an expert college admissions counselor. Based on the following student profile, predict the admission chances for each university in the target list.

Rules:
1. Weigh demographics, academics, extracurriculars and awards together.
2. Read the GPA trend across the grade levels provided. An upward trend is a positive signal; a downward trend is a concern. Mention the trend explicitly in the reasoning.
3. Split every reasoning into exactly three parts: strengths, weaknesses, advice.
"""

ACTIVITY_QUALITY_INSTRUCTIONS = """
You are an expert college admissions counselor. Based on the following student profile, predict the admission chances for each university in the target list.

Rules:
1. Evaluate the profile holistically: demographics, academics, extracurriculars, awards, and whether the activities share a unifying theme (a "spike").
2. Judge extracurriculars by quality and consistency, not by count. Sustained depth and leadership in a few activities outweigh a long list of shallow ones.
3. Read the GPA trend across the grade levels provided. An upward trend is a positive signal; a downward trend is a concern. Mention the trend explicitly.
4. Do not give the same percentage to several highly selective colleges. Differentiate them using the specific programs and campus culture of each school.
5. Split every reasoning into exactly three parts: strengths, weaknesses, advice.
"""

MISSING_DATA_INSTRUCTIONS = f"""
You are an expert college admissions counselor. Based on the following student profile, predict the admission chances for each university in the target list.

Rules:
1. Evaluate the profile holistically: demographics, academics, extracurriculars, awards, and whether the activities share a unifying theme (a "spike").
2. If the standardized test score is "{NOT_PROVIDED}", treat it as a major negative factor and say so explicitly in the weaknesses.
3. Read the GPA trend across the grade levels provided. An upward trend is a positive signal; a downward trend is a concern. Mention the trend explicitly.
4. Do not give the same percentage to several highly selective colleges. Differentiate them using the specific programs and campus culture of each school.
5. Split every reasoning into exactly three parts: strengths, weaknesses, advice.
6. admission_chance_percent must be an integer between {CHANCE_FLOOR} and {CHANCE_CEILING} inclusive.
"""

TEMPLATES: Dict[TemplateName, PromptTemplate] = {
    TemplateName.PLAIN: PromptTemplate(TemplateName.PLAIN, PLAIN_INSTRUCTIONS, ReasoningStyle.TEXT),
    TemplateName.STRUCTURED: PromptTemplate(TemplateName.STRUCTURED, STRUCTURED_INSTRUCTIONS, ReasoningStyle.STRUCTURED),
    TemplateName.GPA_TREND: PromptTemplate(TemplateName.GPA_TREND, GPA_TREND_INSTRUCTIONS, ReasoningStyle.STRUCTURED),
    TemplateName.ACTIVITY_QUALITY: PromptTemplate(
        TemplateName.ACTIVITY_QUALITY, ACTIVITY_QUALITY_INSTRUCTIONS, ReasoningStyle.STRUCTURED
    ),
    TemplateName.MISSING_DATA: PromptTemplate(
        TemplateName.MISSING_DATA, MISSING_DATA_INSTRUCTIONS, ReasoningStyle.STRUCTURED
    ),
}


def get_template(name: TemplateName = TemplateName.MISSING_DATA) -> PromptTemplate:
    """Returns the registered template for name."""
    return TEMPLATES[TemplateName(name)]


def _text(value, fallback: str) -> str:
    if value is None or value == "":
        return fallback
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def _join(items: List[str]) -> str:
    return ", ".join(str(item) for item in items) if items else NONE_LISTED


def format_profile(profile: StudentProfile) -> str:
    """
    Render the labeled field dump of a student profile.

    Absent fields get an explicit fallback string instead of being dropped,
    so the model can see what is missing.
    """
    grade_gpas = profile.grade_gpas()
    if grade_gpas:
        trend = ", ".join(f"{grade}: {value}" for grade, value in grade_gpas)
    else:
        trend = NOT_PROVIDED

    ap_scores = [
        f"{_text(ap.subject, NOT_SPECIFIED)} ({_text(ap.score, NOT_PROVIDED)})" for ap in profile.ap_scores
    ]

    lines = [
        f"- Gender: {_text(profile.gender, NOT_SPECIFIED)}",
        f"- US Citizen: {_text(profile.is_citizen, NOT_SPECIFIED)}",
        f"- Attends US School: {_text(profile.attends_us_school, NOT_SPECIFIED)}",
        f"- GPA: {_text(profile.gpa, NOT_PROVIDED)}",
        f"- GPA by Grade: {trend}",
        f"- SAT: {_text(profile.sat, NOT_PROVIDED)}",
        f"- AP Scores: {_join(ap_scores)}",
        f"- Extracurriculars: {_join(profile.ecs)}",
        f"- Awards: {_join(profile.awards)}",
    ]
    return "\n".join(lines)


def format_colleges(colleges: List[str]) -> str:
    return "\n".join(f"{i}. {college}" for i, college in enumerate(colleges, start=1))


def build_prompt(
    profile: StudentProfile,
    colleges: List[str],
    template: Optional[PromptTemplate] = None,
) -> str:
    """
    Build the full prediction prompt.

    Args:
        profile: Student profile
        colleges: Target colleges, in the order the student listed them
        template: Instruction template, canonical revision when omitted

    Returns:
        Prompt text: instructions, profile dump, numbered college list
    """
    template = template or get_template()
    return (
        f"{template.instructions.strip()}\n\n"
        f"Student Profile:\n{format_profile(profile)}\n\n"
        f"Target College List:\n{format_colleges(colleges)}\n"
    )
