"""本地化错误提示 -- 生成失败时作为 model 消息写入会话"""

from enum import StrEnum

from helperkust.core.models import Language


class ErrorKind(StrEnum):
    """生成失败类别（决定提示文案）"""

    MISSING_CREDENTIAL = "missing_credential"
    POLICY_REJECTED = "policy_rejected"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


_ERROR_MESSAGES: dict[ErrorKind, dict[Language, str]] = {
    ErrorKind.MISSING_CREDENTIAL: {
        Language.EN: "The AI service is not configured: the API key is missing or invalid.",
        Language.RU: "Сервис ИИ не настроен: API-ключ отсутствует или недействителен.",
        Language.ES: "El servicio de IA no está configurado: falta la clave de API o no es válida.",
    },
    ErrorKind.POLICY_REJECTED: {
        Language.EN: "The AI service rejected the request: it is not available in your region or for this content.",
        Language.RU: "Сервис ИИ отклонил запрос: он недоступен в вашем регионе или для этого содержимого.",
        Language.ES: "El servicio de IA rechazó la solicitud: no está disponible en tu región o para este contenido.",
    },
    ErrorKind.TRANSPORT: {
        Language.EN: "Sorry, I encountered an error connecting to the AI.",
        Language.RU: "Произошла ошибка при обращении к ИИ.",
        Language.ES: "Lo siento, se produjo un error al conectar con la IA.",
    },
    ErrorKind.EMPTY_RESPONSE: {
        Language.EN: "No response generated.",
        Language.RU: "Не удалось получить ответ.",
        Language.ES: "No se generó ninguna respuesta.",
    },
    ErrorKind.UNKNOWN: {
        Language.EN: "Sorry, something went wrong while generating the answer. Please try again.",
        Language.RU: "Что-то пошло не так при получении ответа. Попробуйте ещё раз.",
        Language.ES: "Algo salió mal al generar la respuesta. Inténtalo de nuevo.",
    },
}


def error_message(kind: ErrorKind, language: Language) -> str:
    """返回对应语言的错误提示"""
    return _ERROR_MESSAGES[kind][language]
