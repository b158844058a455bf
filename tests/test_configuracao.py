import json

import pytest

from app.services.configuracao import carregar_configuracao
from app.services.erros import ErroConfiguracao

VARIAVEIS = [
    "FIREBASE_CONFIG",
    "FIREBASE_CREDENTIALS",
    "SAC_INITIAL_AUTH_TOKEN",
    "SAC_APP_ID",
    "SAC_TIMEOUT_BANCO",
    "SAC_LOG_LEVEL",
    "SAC_LOG_DB",
    "SAC_INTERVALO_ATUALIZACAO",
]


@pytest.fixture
def ambiente_limpo(monkeypatch, tmp_path):
    for nome in VARIAVEIS:
        monkeypatch.delenv(nome, raising=False)
    return tmp_path / "secrets.env"


def test_sem_configuracao_usa_padroes(ambiente_limpo):
    config = carregar_configuracao(ambiente_limpo)

    assert not config.usa_firebase
    assert config.token_inicial is None
    assert config.app_id is None
    assert config.timeout_banco == 15.0
    assert config.nivel_log == "INFO"
    assert config.intervalo_atualizacao == 2.0


def test_le_variaveis_de_ambiente(ambiente_limpo, monkeypatch, tmp_path):
    monkeypatch.setenv("FIREBASE_CONFIG", json.dumps({"apiKey": "k", "projectId": "sac-municipio"}))
    monkeypatch.setenv("SAC_INITIAL_AUTH_TOKEN", "tok")
    monkeypatch.setenv("SAC_APP_ID", "sac")
    monkeypatch.setenv("SAC_TIMEOUT_BANCO", "7.5")
    monkeypatch.setenv("SAC_LOG_LEVEL", "debug")
    monkeypatch.setenv("SAC_LOG_DB", str(tmp_path / "ops.db"))

    config = carregar_configuracao(ambiente_limpo)

    assert config.usa_firebase
    assert config.api_key == "k"
    assert config.project_id == "sac-municipio"
    assert config.token_inicial == "tok"
    assert config.app_id == "sac"
    assert config.timeout_banco == 7.5
    assert config.nivel_log == "DEBUG"
    assert config.caminho_log == tmp_path / "ops.db"


def test_le_arquivo_secrets_env(ambiente_limpo, monkeypatch):
    # registra a variavel para que o monkeypatch a remova ao final
    monkeypatch.setenv("SAC_APP_ID", "temporario")
    monkeypatch.delenv("SAC_APP_ID")

    ambiente_limpo.write_text("SAC_APP_ID=do-arquivo\n", encoding="utf-8")
    config = carregar_configuracao(ambiente_limpo)
    assert config.app_id == "do-arquivo"


@pytest.mark.parametrize("bruto", ["{nao e json", "[1, 2]", json.dumps({"apiKey": "k"})])
def test_firebase_config_malformado(ambiente_limpo, monkeypatch, bruto):
    monkeypatch.setenv("FIREBASE_CONFIG", bruto)
    with pytest.raises(ErroConfiguracao):
        carregar_configuracao(ambiente_limpo)


@pytest.mark.parametrize("nome,valor", [
    ("SAC_TIMEOUT_BANCO", "abc"),
    ("SAC_TIMEOUT_BANCO", "0"),
    ("SAC_INTERVALO_ATUALIZACAO", "-1"),
    ("SAC_LOG_LEVEL", "barulhento"),
])
def test_valores_invalidos(ambiente_limpo, monkeypatch, nome, valor):
    monkeypatch.setenv(nome, valor)
    with pytest.raises(ErroConfiguracao):
        carregar_configuracao(ambiente_limpo)
