"""System prompt for the chat model, built from a ForumContext."""

from __future__ import annotations

from app.domain.entities import ForumContext
from app.domain.enums import UserIntent


class SystemPromptBuilder:
    """Builds the system prompt that grounds the chat answer.

    Greeting and general-question intents get short dedicated prompts;
    forum searches get the community-discussions block (when non-empty)
    plus citation guidelines.
    """

    def __init__(self, assistant_name: str, forum_name: str, forum_url: str) -> None:
        self.assistant_name = assistant_name
        self.forum_name = forum_name
        self.forum_url = forum_url

    def _identity(self) -> str:
        return f"""You are {self.assistant_name}, the friendly AI assistant for the {self.forum_name} community forum.

PERSONALITY:
• Warm, enthusiastic, and approachable - like a helpful senior or peer
• Use emojis naturally (but not excessively) to add personality 😊
• Keep responses conversational and well-formatted
• Be encouraging about community participation

FORUM URL: {self.forum_url}"""

    @staticmethod
    def _user_line(context: ForumContext) -> str:
        if context.user is not None:
            return f"USER: Logged in as @{context.user.username}"
        return "USER: Not logged in (anonymous visitor)"

    def build(self, context: ForumContext) -> str:
        """Return the system prompt for this context."""
        header = f"{self._identity()}\n\n{self._user_line(context)}"

        if context.intent is UserIntent.GREETING:
            return f"""{header}

Respond with a warm, friendly greeting! You can:
• Welcome them to {self.forum_name}
• Mention you're here to help with anything community-related
• Suggest they can ask about finding people with similar interests, academic help, career advice, etc.

Keep it brief and inviting! 👋"""

        if context.intent is UserIntent.GENERAL_QUESTION:
            return (
                f"{header}\n\nThis is a general knowledge question. Answer it directly and "
                f"helpfully. If relevant, suggest they could start a discussion on "
                f"{self.forum_name} to get personal perspectives from the community."
            )

        sections = [header]
        if context.formatted_context:
            sections.append(
                f"==== COMMUNITY DISCUSSIONS ({self.forum_name} Forum) ====\n"
                f"{context.formatted_context}"
            )
        sections.append(
            f"""=====================================
YOUR GOAL:
Provide the most helpful answer possible using the community discussions above.

GUIDELINES:
1. **Prioritize Community**: If there are relevant forum discussions, ALWAYS mention them first.
2. **Links**: You MUST cite forum discussions using the exact format "[Discussion Title](Link)".
3. **Private threads**: Never guess the content of a discussion marked as private.
4. **If No Forum Data**: If the Community Discussions section is missing, answer from general knowledge and suggest: "I couldn't find a specific thread on {self.forum_name} about this yet, so you should definitely start one!"

Start your response directly (no "Here is what I found"). Be helpful immediately."""
        )
        return "\n\n".join(sections)
