"""
Static portfolio record served by the API and used to ground answers.

The profile is built once at import time and is frozen, so every request
can share it without locking.
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    url: str


class ProjectRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    desc: str
    tags: Tuple[str, ...] = ()
    url: str


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    role: str
    location: str
    email: str
    links: Tuple[Link, ...] = ()
    # declaration order matters for the local matcher
    skills: Tuple[str, ...] = ()
    projects: Tuple[ProjectRef, ...] = ()


_METHODOLOGIES_REPO = "https://github.com/SaiTejaBandamidi/SoftwareDevelopmentMethodologies"

PROFILE = Profile(
    name="Sai Teja Bandamidi",
    role="Software Engineer — Software Development / Agile / Go / Python / SQL / GraphQL",
    location="Phoenix, AZ, USA",
    email="saitejabatwork@gmail.com",
    links=(
        Link(label="GitHub", url="https://github.com/SaiTejaBandamidi"),
        Link(label="Blog", url="https://medium.com/@bsaiteja"),
    ),
    skills=(
        "GoLang", "Python", "Java",
        "HTML", "CSS", "JavaScript",
        "SQL", "REST APIs", "GraphQL",
        "MySQL", "NoSQL", "MongoDB", "PostgreSQL",
    ),
    projects=(
        ProjectRef(
            title="Go GraphQL API (Harry Potter Demo)",
            desc="gqlgen + SQLC + Postgres with optimized resolvers and tracing.",
            tags=("Go", "GraphQL", "SQLC", "Postgres", "Tracing"),
            url="https://github.com/SaiTejaBandamidi/go-graphql-sqlc-api",
        ),
        ProjectRef(
            title="Personal Portfolio Website Jarvis-Inspired",
            desc="An interactive AI-powered portfolio website styled after Iron Man's JARVIS HUD.",
            tags=("Go", "HTML", "CSS", "JavaScript"),
            url="https://github.com/SaiTejaBandamidi/my-portfolio",
        ),
        ProjectRef(
            title="CashCard Application",
            desc="A web app for managing cash cards and wallets with user accounts, balances, and transactions.",
            tags=("Python", "Flask", "HTML", "CSS"),
            url="https://github.com/SaiTejaBandamidi/CashCardApplication",
        ),
        ProjectRef(
            title="Software Development Methodologies",
            desc="A collection of coding exercises exploring different software development methodologies and coding practices.",
            tags=("Python", "Jupyter", "Markdown"),
            url=_METHODOLOGIES_REPO,
        ),
        ProjectRef(
            title="Algorithm Implementations",
            desc="Notebook-based projects implementing algorithms as part of coursework.",
            tags=("Python", "Jupyter"),
            url=_METHODOLOGIES_REPO,
        ),
        ProjectRef(
            title="Programming and Problem Solving in Python",
            desc="Programming exercises demonstrating problem-solving and coding best practices.",
            tags=("Python", "Software Development"),
            url=_METHODOLOGIES_REPO,
        ),
        ProjectRef(
            title="Projects - WebScraping and File Processing in Python",
            desc="Standalone Python scripts working with sequences and algorithms, showcasing coding fundamentals.",
            tags=("Python", "File Processing", "Algorithms"),
            url=_METHODOLOGIES_REPO,
        ),
    ),
)


def profile_summary(profile: Profile = PROFILE) -> str:
    """Serialized dump of the whole profile for the remote system prompt."""
    return f"PROFILE: {profile.model_dump_json()}"
