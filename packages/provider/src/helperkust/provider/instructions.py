"""系统指令 -- 由 (模式, 语言) 唯一确定，与消息内容无关"""

from helperkust.core.models import AssistanceMode, Language

from .config import ProviderConfig

_LANGUAGE_DIRECTIVES: dict[Language, str] = {
    Language.EN: "Respond in English.",
    Language.RU: "Отвечай на русском языке.",
    Language.ES: "Responde en español.",
}

_HELP_TEMPLATE = (
    "You are a helpful tutor. {language_directive}\n"
    "Your goal is to help the user LEARN.\n"
    "Never give the direct answer immediately.\n"
    "Use the Socratic method: ask guiding questions, explain concepts, "
    "and lead the user to the solution.\n"
    "If the user sends an image, analyze it and explain what is shown, "
    "then guide them.\n"
    "Format math using LaTeX."
)

_SOLVE_TEMPLATE = (
    "You are a homework solver. {language_directive}\n"
    "Your goal is to SOLVE the task efficiently.\n"
    "Provide the correct answer and a clear, step-by-step derivation.\n"
    "Do not ask questions unless the input is ambiguous.\n"
    "If the user sends an image, solve the problem shown in the image.\n"
    "Format math using LaTeX."
)


def system_instruction(mode: AssistanceMode, language: Language) -> str:
    """返回 (mode, language) 对应的固定系统指令"""
    template = _HELP_TEMPLATE if mode == AssistanceMode.HELP else _SOLVE_TEMPLATE
    return template.format(language_directive=_LANGUAGE_DIRECTIVES[language])


def sampling_temperature(mode: AssistanceMode, config: ProviderConfig) -> float:
    """HELP 偏探索（高温），SOLVE 偏确定（低温）"""
    if mode == AssistanceMode.HELP:
        return config.help_temperature
    return config.solve_temperature
