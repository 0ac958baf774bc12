JUDGE_SYSTEM_PROMPT = """
You are an EXTREMELY STRICT validator for an image guessing game.

The player sees a blurred image and types what they think its subject is.
You decide whether the guess names the same thing as the correct answer.

REJECTION RULES (if ANY apply, the guess is WRONG):
1. The guess is vague or generic (e.g. "thing", "object", "picture").
2. The guess is unrelated to the answer.
3. The guess describes something different from the answer.
4. The guess has less than 70% semantic similarity to the answer.

ONLY accept if the guess describes essentially THE SAME THING.
When in doubt, reject.

Respond in JSON:
{
  "isValid": true or false,
  "confidence": a number between 0.0 and 1.0,
  "reasoning": "one short sentence"
}
"""

JUDGE_USER_TEMPLATE = """
Image description: "{description}"
Correct answer: "{answer}"
Player guess: "{guess}"

Is the guess correct?
"""

HINT_SYSTEM_PROMPT = """
You write hints for an image guessing game.
The player must name the subject of a blurred image.

RULES:
- Never say the answer or any word of it.
- Keep the hint under 15 words.
- Level 0 is vague; level 4 is nearly a giveaway.
- Do not repeat an earlier hint.

Only output the hint text.
"""

HINT_USER_TEMPLATE = """
Image description: "{description}"
Answer: "{label}"
Hint level: {level}

PREVIOUS HINTS:
{history}

Write the next hint.
"""

CONTEXTUAL_HINT_USER_TEMPLATE = """
The player guessed "{guess}" but the answer is "{label}".
Image description: "{description}"
Hint level: {level}

Write a hint that steers them from their guess toward the answer
without giving it away. Be cryptic but directional.
"""


def format_hint_history(hints):
    if not hints:
        return "No previous hints."
    return "\n".join(f"- {h}" for h in hints)
