from portfolio.profile_store import Profile, PROFILE

GENERIC_ANSWER = (
    "I can answer questions about my skills (Go, GraphQL, SQLC, etc.), "
    "my projects, and how I use them."
)


class LocalAnswerEngine:
    """
    Deterministic keyword matcher used when no cached or remote answer exists.

    Rules are checked in priority order: skill names, then project titles,
    then a self-introduction, then a generic prompt. The first match wins;
    declaration order in the profile decides ties.
    """

    def __init__(self, profile: Profile = PROFILE):
        self.profile = profile

    def answer(self, question: str) -> str:
        q = question.lower()

        for skill in self.profile.skills:
            if skill.lower() in q:
                return f"I have hands-on experience with {skill} in my projects."

        for project in self.profile.projects:
            if project.title.lower() in q:
                return f"{project.title} — {project.desc}. Repo: {project.url}"

        if "who are you" in q:
            p = self.profile
            return f"I'm {p.name}, {p.role}, based in {p.location}."

        return GENERIC_ANSWER
