"""
Conductor - Prompt Templates
=============================
Centralised prompt management for the slide assistant.  All prompts
live here so they can be versioned and reviewed independently of
application logic.

Each template takes a single ``{text}`` placeholder: the raw slide
content, appended after a blank line.

Exports
-------
SUMMARIZE_PROMPT_TEMPLATE, ASK_QUESTION_PROMPT_TEMPLATE,
INVALID_COMMAND_MESSAGE.
"""

# ══════════════════════════════════════════════════════════════════════
#  COMMAND TEMPLATES
# ══════════════════════════════════════════════════════════════════════

SUMMARIZE_PROMPT_TEMPLATE: str = "Summarize the following slide content in one concise sentence. Focus on the key takeaway:\n\n{text}"

ASK_QUESTION_PROMPT_TEMPLATE: str = "Act as my assistant. Based on the following slide content, what's a likely question the audience would have? Provide one specific, relevant question:\n\n{text}"


# ══════════════════════════════════════════════════════════════════════
#  ERROR MESSAGES
# ══════════════════════════════════════════════════════════════════════

INVALID_COMMAND_MESSAGE: str = "Invalid command. Use 'summarize' or 'ask-question'"
