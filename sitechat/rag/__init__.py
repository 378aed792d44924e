"""Answer generation over the cached site corpus."""

from sitechat.rag.answer import NO_ANSWER, AnswerGenerator, build_prompt

__all__ = ["AnswerGenerator", "build_prompt", "NO_ANSWER"]
