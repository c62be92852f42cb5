"""
User-facing strings, per UI language.

The chapter heading and the default export basename live here too, so an
exported story reads in the same language as the interface that produced it.
"""

DEFAULT_LANGUAGE = "en"

MESSAGES = {
    "en": {
        "app_title": "AI Story Weaver",
        "welcome_title": "Welcome to AI Story Weaver",
        "welcome_body": (
            "Your journey to create fantastic worlds begins here. Fill in the details "
            "of your story in the left panel, and the AI will weave a complete "
            "narrative for you, chapter by chapter."
        ),
        "characters_label": "Characters",
        "characters_placeholder": "E.g. A fallen knight seeking redemption and a rebel princess...",
        "characters_default": "A skeptical detective named Alex and an enigmatic medium named Luna.",
        "style_label": "Style / Genre",
        "style_placeholder": "E.g. Epic fantasy with a complex magic system...",
        "style_default": "Mystery noir with supernatural elements, set in a rainy 1940s city.",
        "pages_label": "Pages (1-200)",
        "chapters_label": "Chapters",
        "submit": "Submit",
        "submitting": "Weaving your story...",
        "cancel": "Cancel",
        "new_story": "Start a New Story",
        "edit": "Edit",
        "view": "View Story",
        "save": "Save Story (.md)",
        "editor_label": "Story editor",
        "error_prefix": "Oops!",
        "outline_status": "Crafting a compelling story outline...",
        "chapter_status": "Writing Chapter {number} of {total}...",
        "complete_status": "Your story is complete!",
        "generic_error": "An unexpected error occurred while weaving your story. Please try again.",
        "chapter_heading": "Chapter",
        "default_basename": "story",
    },
    "pt": {
        "app_title": "AI Story Weaver",
        "welcome_title": "Bem-vindo ao AI Story Weaver",
        "welcome_body": (
            "Sua jornada para criar mundos fantásticos começa aqui. Preencha os detalhes "
            "da sua história no painel à esquerda, e a IA tecerá uma narrativa completa "
            "para você, capítulo por capítulo."
        ),
        "characters_label": "Personagens",
        "characters_placeholder": "Ex: Um cavaleiro caído em busca de redenção e uma princesa rebelde...",
        "characters_default": "Um detetive cético chamado Alex e uma médium enigmática chamada Luna.",
        "style_label": "Estilo / Gênero",
        "style_placeholder": "Ex: Fantasia épica com um sistema de magia complexo...",
        "style_default": "Mistério noir com elementos sobrenaturais, ambientado em uma chuvosa cidade dos anos 1940.",
        "pages_label": "Páginas (1-200)",
        "chapters_label": "Capítulos",
        "submit": "Enviar",
        "submitting": "Tecendo sua história...",
        "cancel": "Cancelar",
        "new_story": "Começar Nova História",
        "edit": "Editar",
        "view": "Visualizar História",
        "save": "Salvar História (.md)",
        "editor_label": "Editor de história",
        "error_prefix": "Oops!",
        "outline_status": "Criando um roteiro envolvente para a história...",
        "chapter_status": "Escrevendo o Capítulo {number} de {total}...",
        "complete_status": "Sua história está completa!",
        "generic_error": "Ocorreu um erro inesperado ao tecer sua história. Por favor, tente novamente.",
        "chapter_heading": "Capítulo",
        "default_basename": "historia",
    },
}

SUPPORTED_LANGUAGES = {
    "en": "English",
    "pt": "Português",
}


def get_messages(language: str = DEFAULT_LANGUAGE) -> dict:
    """Strings for `language`, falling back to English for unsupported codes."""
    if language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE
    return MESSAGES[language]
