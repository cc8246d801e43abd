"""
Language model initialization
"""

from langchain_groq import ChatGroq

from utils.config import get_settings

# LLM Initialization
llm_instance = None


def get_llm():
    global llm_instance
    if llm_instance is None:
        settings = get_settings()
        llm_instance = ChatGroq(
            model=settings.groq_model,
            temperature=0.7,
            max_tokens=2000,
            api_key=settings.groq_api_key,
        )
    return llm_instance


def get_summary_llm():
    """Shorter, steadier completions for note summaries"""
    return get_llm().bind(max_tokens=200, temperature=0.5)
