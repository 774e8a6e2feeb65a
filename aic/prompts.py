"""Default prompts and prompt assembly for commit message generation."""

DIFF_PLACEHOLDER = "{diff}"

# Positional placeholder accepted for prompts written for older releases
LEGACY_DIFF_PLACEHOLDER = "{}"

DEFAULT_SYSTEM_PROMPT = """You are an expert at writing clear and concise commit messages.
Follow these rules strictly:

1. Start with a type: feat, fix, docs, style, refactor, perf, test, build, ci, chore, or revert
2. Add a scope in parentheses when the change affects a specific component/module
3. Write a brief description in imperative mood (e.g., 'add' not 'added')
4. Keep the first line under 72 characters
5. For simple changes (single file, small modifications), use only the subject line
6. For complex changes (multiple files, new features, breaking changes):
   - Add a body explaining what and why
   - Use numbered points (1., 2., 3., etc.) to list distinct changes
   - Organize points in order of importance

Examples:
Simple: fix(parser): correct string interpolation logic
Complex: feat(auth): implement OAuth2 authentication system

This commit adds comprehensive OAuth2 support:

1. Implement Google and GitHub OAuth2 providers
2. Create secure token storage and refresh mechanism
3. Add middleware for protected route authentication
4. Update user model to store OAuth identifiers

Output only the commit message. No markdown fences, no commentary."""

DEFAULT_USER_PROMPT = """Generate a commit message for the following changes. First analyze the complexity of the diff.

For simple changes, provide only a subject line.

For complex changes, include a body with numbered points (1., 2., 3.) that clearly outline
each distinct modification or feature. Organize these points by importance.

Look for patterns like new features, bug fixes, or configuration changes to determine
the appropriate type and scope:

```diff
{diff}
```"""


def build_user_prompt(template: str, diff: str) -> str:
    """Embed the staged diff into a user prompt template.

    The diff is substituted at ``{diff}`` (or a bare ``{}``). Plain string
    replacement is used rather than ``str.format`` because both diffs and
    user-written prompts routinely contain braces.

    Args:
        template: The user prompt template.
        diff: The staged diff.

    Returns:
        The user prompt with the diff embedded.
    """
    if DIFF_PLACEHOLDER in template:
        return template.replace(DIFF_PLACEHOLDER, diff, 1)
    if LEGACY_DIFF_PLACEHOLDER in template:
        return template.replace(LEGACY_DIFF_PLACEHOLDER, diff, 1)
    return f"{template.rstrip()}\n\n```diff\n{diff}\n```"


def build_messages(system_prompt: str, user_prompt_template: str, diff: str) -> list[dict]:
    """Build the chat messages sent to the completion API.

    Args:
        system_prompt: The system prompt.
        user_prompt_template: The user prompt template containing the diff placeholder.
        diff: The staged diff.

    Returns:
        A list with one system and one user message.
    """
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": build_user_prompt(user_prompt_template, diff)},
    ]
