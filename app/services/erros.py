from src.validation import ErroSAC, ErroValidacao


class ErroConfiguracao(ErroSAC):
    mensagem_usuario = "Erro ao inicializar o aplicativo. Por favor, tente novamente."


class ErroAutenticacao(ErroSAC):
    mensagem_usuario = "Erro ao autenticar. Por favor, tente novamente."


class ErroEscritaBanco(ErroSAC):
    mensagem_usuario = "Erro ao salvar os dados. Por favor, tente novamente."


class ErroLeituraBanco(ErroSAC):
    mensagem_usuario = "Erro ao carregar os dados."


__all__ = [
    "ErroSAC",
    "ErroValidacao",
    "ErroConfiguracao",
    "ErroAutenticacao",
    "ErroEscritaBanco",
    "ErroLeituraBanco",
]
