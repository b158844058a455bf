"""
Testes das regras de validacao dos formularios.

Execute com: pytest tests/test_validation.py -v
"""

import pytest

from src.validation import (
    STATUS_BENEFICIO,
    ErroValidacao,
    campo_vazio,
    exigir_formulario_valido,
    normalizar_status,
    validar_campos_obrigatorios,
    validar_status,
)


# =============================================================================
# TESTES DE CAMPOS OBRIGATORIOS
# =============================================================================

class TestCamposObrigatorios:
    """Verifica a deteccao de campos obrigatorios vazios."""

    def test_todos_preenchidos(self):
        resultado = validar_campos_obrigatorios(
            {"nomeCidadao": "Maria Silva", "descricao": "Solicitação de auxílio"},
            ["nomeCidadao", "descricao"]
        )
        assert resultado["valido"]
        assert resultado["campos_faltando"] == []

    def test_campo_ausente(self):
        resultado = validar_campos_obrigatorios({"nomeCidadao": "Maria"}, ["nomeCidadao", "descricao"])
        assert not resultado["valido"]
        assert resultado["campos_faltando"] == ["descricao"]

    @pytest.mark.parametrize("valor", ["", "   ", "\n\t", None])
    def test_valores_considerados_vazios(self, valor):
        assert campo_vazio(valor)

    def test_texto_com_conteudo_nao_e_vazio(self):
        assert not campo_vazio(" Maria ")


# =============================================================================
# TESTES DE STATUS DO BENEFICIO
# =============================================================================

class TestStatusBeneficio:
    """Status do beneficio deve pertencer a enumeracao conhecida."""

    def test_status_permitidos(self):
        assert STATUS_BENEFICIO == ["Pendente", "Aprovado", "Negado", "Concluído"]
        for status in STATUS_BENEFICIO:
            assert validar_status(status)["valido"]

    def test_status_desconhecido(self):
        resultado = validar_status("Cancelado")
        assert not resultado["valido"]
        assert resultado["valores_permitidos"] == STATUS_BENEFICIO

    def test_status_vazio_vira_pendente(self):
        assert normalizar_status("") == "Pendente"
        assert normalizar_status(None) == "Pendente"
        assert normalizar_status(" Aprovado ") == "Aprovado"


# =============================================================================
# TESTES DE EXIGENCIA DO FORMULARIO
# =============================================================================

class TestExigirFormulario:

    def test_formulario_valido_nao_levanta(self):
        exigir_formulario_valido(
            {"nomeCidadao": "João", "tipoBeneficio": "Bolsa", "statusBeneficio": "Pendente"},
            ["nomeCidadao", "tipoBeneficio"],
            com_status=True
        )

    def test_levanta_com_campos_faltando(self):
        with pytest.raises(ErroValidacao) as exc:
            exigir_formulario_valido({"nomeCidadao": "", "descricao": ""}, ["nomeCidadao", "descricao"])
        assert exc.value.campos == ["nomeCidadao", "descricao"]
        assert exc.value.mensagem == "Por favor, preencha todos os campos."

    def test_mensagem_personalizada(self):
        with pytest.raises(ErroValidacao, match="obrigatórios"):
            exigir_formulario_valido(
                {"nomeCidadao": "João", "tipoBeneficio": ""},
                ["nomeCidadao", "tipoBeneficio"],
                "Por favor, preencha todos os campos obrigatórios."
            )

    def test_status_invalido(self):
        with pytest.raises(ErroValidacao) as exc:
            exigir_formulario_valido(
                {"nomeCidadao": "João", "tipoBeneficio": "Bolsa", "statusBeneficio": "Arquivado"},
                ["nomeCidadao", "tipoBeneficio"],
                com_status=True
            )
        assert exc.value.campos == ["statusBeneficio"]
