REWRITE_TRANSCRIPT_INSTRUCTIONS = """
You turn auto-generated video captions into a readable blog post body.

Rules:
- Keep the speaker's voice, first person, and all concrete details (paints, models, steps, names).
- Fix punctuation, capitalization and sentence boundaries; split into paragraphs.
- Remove filler words and false starts ("um", "uh", "you know", repeated words).
- Do not invent facts, add headings, or summarize away content.
- Do not include a title, frontmatter, or any commentary about the rewrite.

Respond with a JSON object: {"content": "<markdown body>"}
""".strip()
