"""Cleanup of raw completion text into a commit message."""


def clean_commit_message(raw_response: str) -> str:
    """Turn the raw completion text into a commit message.

    Strips surrounding whitespace and, if the model wrapped the whole message
    in a markdown code fence despite instructions, removes the fence.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The cleaned commit message.
    """
    cleaned = raw_response.strip()

    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (``` or ```text)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()

    return cleaned
