import re
from datetime import datetime, timezone

from app.services.colecao import ATENDIMENTOS, BENEFICIOS
from app.utils.data_handler import (
    agora_iso,
    espelho_para_dataframe,
    formatar_data,
    formatar_status,
    ler_data_iso,
)


def test_agora_iso_formato():
    valor = agora_iso()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", valor)
    assert ler_data_iso(valor) <= datetime.now(timezone.utc)


def test_ler_data_invalida():
    assert ler_data_iso(None) is None
    assert ler_data_iso("ontem") is None
    assert formatar_data("ontem") == ""


def test_formatar_data():
    data = ler_data_iso("2025-03-01T12:00:00.000Z")
    assert formatar_data("2025-03-01T12:00:00.000Z") == data.astimezone().strftime("%d/%m/%Y")


def test_formatar_status():
    assert formatar_status("Aprovado") == ":green-background[Aprovado]"
    assert formatar_status("Concluído") == ":gray-background[Concluído]"


def test_dataframe_vazio_tem_colunas():
    df = espelho_para_dataframe([], ATENDIMENTOS)
    assert list(df.columns) == ["id", "Nome do Cidadão", "Descrição do Atendimento", "Data de Registro"]
    assert df.empty


def test_dataframe_preserva_ordem_do_snapshot():
    espelho = [
        {"id": "b", "nomeCidadao": "Beto", "tipoBeneficio": "Gás", "statusBeneficio": "Negado",
         "dataConcessao": "2025-02-01T10:00:00.000Z", "dataAtualizacao": "2025-02-02T10:00:00.000Z"},
        {"id": "a", "nomeCidadao": "Ana", "tipoBeneficio": "Aluguel", "statusBeneficio": "Pendente",
         "dataConcessao": "2025-01-01T10:00:00.000Z"},
    ]
    df = espelho_para_dataframe(espelho, BENEFICIOS)

    assert list(df["id"]) == ["b", "a"]
    assert list(df.columns) == ["id", "Nome do Cidadão", "Tipo de Benefício", "Status", "Data de Concessão"]
    assert df.iloc[1]["Data de Concessão"] == formatar_data("2025-01-01T10:00:00.000Z")


def test_dataframe_com_campo_ausente():
    df = espelho_para_dataframe([{"id": "x", "nomeCidadao": "Sem descrição"}], ATENDIMENTOS)
    assert df.iloc[0]["Descrição do Atendimento"] == ""
    assert df.iloc[0]["Data de Registro"] == ""
