"""
Modulo de validacao dos formularios de atendimentos e beneficios.

As regras sao independentes da interface: recebem um dicionario com os
valores do formulario e levantam ErroValidacao quando algo obrigatorio falta.
"""

from typing import Any, Iterable


STATUS_BENEFICIO = ["Pendente", "Aprovado", "Negado", "Concluído"]
STATUS_PADRAO = "Pendente"


class ErroSAC(Exception):
    """Base de todos os erros tratados pelo aplicativo."""

    mensagem_usuario = "Ocorreu um erro inesperado. Por favor, tente novamente."

    def __init__(self, mensagem: str = None):
        super().__init__(mensagem or self.mensagem_usuario)
        self.mensagem = mensagem or self.mensagem_usuario


class ErroValidacao(ErroSAC):
    """Campos obrigatorios vazios ou valores fora do permitido."""

    mensagem_usuario = "Por favor, preencha todos os campos."

    def __init__(self, mensagem: str = None, campos: Iterable[str] = ()):
        super().__init__(mensagem)
        self.campos = list(campos)


def campo_vazio(valor: Any) -> bool:
    if valor is None:
        return True
    if isinstance(valor, str):
        return valor.strip() == ""
    return False


def validar_campos_obrigatorios(dados: dict, obrigatorios: Iterable[str]) -> dict:
    """Retorna o resultado da checagem no formato usado pelas telas."""
    faltando = [campo for campo in obrigatorios if campo_vazio(dados.get(campo))]
    return {
        "valido": len(faltando) == 0,
        "campos_faltando": faltando
    }


def validar_status(valor: str) -> dict:
    return {
        "valido": valor in STATUS_BENEFICIO,
        "valores_permitidos": STATUS_BENEFICIO
    }


def normalizar_status(valor: Any) -> str:
    if campo_vazio(valor):
        return STATUS_PADRAO
    return str(valor).strip()


def exigir_formulario_valido(dados: dict, obrigatorios: Iterable[str], mensagem: str = None, com_status: bool = False):
    resultado = validar_campos_obrigatorios(dados, obrigatorios)
    if not resultado["valido"]:
        raise ErroValidacao(mensagem, campos=resultado["campos_faltando"])

    if com_status:
        status = validar_status(dados.get("statusBeneficio"))
        if not status["valido"]:
            raise ErroValidacao(
                f"Status inválido. Valores permitidos: {', '.join(status['valores_permitidos'])}.",
                campos=["statusBeneficio"]
            )
