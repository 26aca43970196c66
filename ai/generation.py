# ai/generation.py
from ai.client import get_client
from memory.models import Profile
from settings import OPENAI_MODEL, OPENAI_TEMPERATURE

SYSTEM_PROMPT = "You are a professional career counselor."


def build_career_prompt(profile: Profile) -> str:
    """
    Structured prompt for the generator. The response is rendered as HTML
    in the transcript, so markdown is explicitly ruled out.
    """
    return f"""You are a professional career counselor. Based on this profile, provide a comprehensive career path analysis. Format your response using HTML tags for proper formatting.

Person's Profile:
- Name: {profile.name}
- Country: {profile.country}
- Religion/Culture: {profile.religion}
- Current Role: {profile.current_role}
- Experience Level: {profile.experience_level}
- Skills: {profile.skills}
- Interests: {profile.interests}
- Career Goals: {profile.career_goals}
- Work Environment: {profile.work_environment}
- Industry: {profile.industry}

Provide a detailed response with:
1. <strong>Career Path Analysis</strong>
2. <strong>Recommended Next Steps</strong>
3. <strong>Skill Development Plan</strong>
4. <strong>Industry Insights</strong>
5. <strong>Alternative Career Options</strong>
6. <strong>Timeline & Milestones</strong>

Use HTML formatting: <strong>, <ul>, <li>, <p>, <em>. No markdown."""


async def generate_career_path(prompt: str) -> str:
    """
    One completion for the finished-profile prompt.
    Raises on transport errors or an empty answer; callers decide how to surface it.
    """
    response = await get_client().chat.completions.create(
        model=OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=OPENAI_TEMPERATURE,
    )
    text = (response.choices[0].message.content or "").strip()
    if not text:
        raise ValueError("Empty completion")
    return text
