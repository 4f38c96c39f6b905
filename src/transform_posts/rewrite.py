import json
import os

from openai import OpenAI

from transform_posts.instructions import REWRITE_TRANSCRIPT_INSTRUCTIONS

DEFAULT_MODEL = "gpt-4o-mini"


def rewrite_transcript(title: str, transcript: str, model: str = DEFAULT_MODEL) -> str:
    """Clean up a raw caption dump into paragraphs using an LLM."""
    client = OpenAI(api_key=os.environ.get("OPENAI_API_KEY"))

    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": REWRITE_TRANSCRIPT_INSTRUCTIONS},
            {"role": "user", "content": f"Title: {title}\n\nTranscript:\n{transcript}"},
        ],
        response_format={"type": "json_object"},
    )

    content = response.choices[0].message.content
    data = json.loads(content)

    rewritten = (data.get("content") or "").strip()
    if not rewritten:
        raise ValueError("Model returned an empty rewrite")
    return rewritten
