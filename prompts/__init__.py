"""
Prompt templates for the LLM enhancer.
"""
from .enhancement_prompt import get_enhancement_prompt, get_enhancement_system_prompt

__all__ = ["get_enhancement_prompt", "get_enhancement_system_prompt"]
