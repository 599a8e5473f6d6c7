"""
Keyword-based skill extraction for job postings.

External job boards return free text without structured skills, so the
required skills of those postings are read off a fixed keyword catalogue.
Lookup is a case-insensitive substring test, the same lexical policy the
matcher uses; short keywords such as "R", "Go" or "AI" hit often.
"""

from typing import List, Sequence

from .normalize import skill_key

DEFAULT_SKILL_LIMIT = 10

PROGRAMMING_LANGUAGES = [
    "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Go", "Rust",
    "Ruby", "PHP", "Scala", "Kotlin", "Swift",
]
ML_AI = [
    "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch", "Keras",
    "Scikit-learn", "NLP", "Computer Vision", "Neural Networks", "AI",
    "Artificial Intelligence", "LLM", "GPT", "Transformers", "BERT", "OpenAI",
]
DATA_SCIENCE = [
    "Data Science", "Pandas", "NumPy", "Data Analysis", "Statistics", "R",
    "Jupyter", "Data Visualization",
]
WEB = [
    "React", "Vue", "Angular", "Node.js", "Express", "Django", "Flask",
    "FastAPI", "Spring Boot", "HTML", "CSS", "Tailwind", "Next.js", "GraphQL",
    "REST API", "MongoDB", "PostgreSQL", "MySQL", "Redis",
]
CLOUD_DEVOPS = [
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "CI/CD", "Linux", "Git",
    "Terraform", "Jenkins",
]
OTHER = [
    "SQL", "NoSQL", "Microservices", "Agile", "Scrum", "API Development",
    "Unit Testing",
]

SKILL_KEYWORDS = PROGRAMMING_LANGUAGES + ML_AI + DATA_SCIENCE + WEB + CLOUD_DEVOPS + OTHER


def extract_skills(
    text: str,
    keywords: Sequence[str] = SKILL_KEYWORDS,
    limit: int = DEFAULT_SKILL_LIMIT,
) -> List[str]:
    """
    Find catalogue skills mentioned in a piece of text.

    Args:
        text: Job title and description
        keywords: Skill catalogue, in priority order
        limit: Maximum number of skills returned

    Returns:
        Unique keywords found in the text, in catalogue order
    """
    if not text or limit <= 0:
        return []

    haystack = skill_key(text)
    found: List[str] = []
    seen = set()
    for keyword in keywords:
        if keyword in seen:
            continue
        if skill_key(keyword) in haystack:
            seen.add(keyword)
            found.append(keyword)
            if len(found) == limit:
                break
    return found
