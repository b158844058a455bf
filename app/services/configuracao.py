import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from app.services.erros import ErroConfiguracao
from app.services.logger import DB_PATH as LOG_DB_PADRAO

ENV_PATH = Path(__file__).parent.parent / "secrets.env"


@dataclass(frozen=True)
class Configuracao:
    firebase_config: dict = field(default_factory=dict)
    caminho_credenciais: Optional[str] = None
    token_inicial: Optional[str] = None
    app_id: Optional[str] = None
    timeout_banco: float = 15.0
    nivel_log: str = "INFO"
    caminho_log: Path = LOG_DB_PADRAO
    intervalo_atualizacao: float = 2.0

    @property
    def usa_firebase(self):
        return bool(self.firebase_config)

    @property
    def api_key(self):
        return self.firebase_config.get("apiKey")

    @property
    def project_id(self):
        return self.firebase_config.get("projectId")


def _ler_numero(nome, padrao):
    valor = os.getenv(nome)
    if not valor:
        return padrao
    try:
        numero = float(valor)
    except ValueError:
        raise ErroConfiguracao(f"Valor inválido para {nome}: {valor!r}")
    if numero <= 0:
        raise ErroConfiguracao(f"{nome} deve ser maior que zero")
    return numero


def _ler_firebase_config():
    bruto = os.getenv("FIREBASE_CONFIG")
    if not bruto:
        return {}

    try:
        config = json.loads(bruto)
    except json.JSONDecodeError as e:
        raise ErroConfiguracao(f"FIREBASE_CONFIG não é um JSON válido: {e}") from e

    if not isinstance(config, dict):
        raise ErroConfiguracao("FIREBASE_CONFIG deve ser um objeto JSON")

    faltando = [chave for chave in ("apiKey", "projectId") if not config.get(chave)]
    if faltando:
        raise ErroConfiguracao(f"FIREBASE_CONFIG sem as chaves: {', '.join(faltando)}")

    return config


def carregar_configuracao(env_path=ENV_PATH):
    """Le as variaveis de ambiente (e o secrets.env, se existir).

    A ausencia de configuracao nao e erro: sem FIREBASE_CONFIG o aplicativo
    usa o backend local. Valores presentes porem malformados levantam
    ErroConfiguracao.
    """
    load_dotenv(env_path, override=False)

    caminho_log = os.getenv("SAC_LOG_DB")
    nivel_log = (os.getenv("SAC_LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(nivel_log), int):
        raise ErroConfiguracao(f"Nível de log inválido: {nivel_log}")

    return Configuracao(
        firebase_config=_ler_firebase_config(),
        caminho_credenciais=os.getenv("FIREBASE_CREDENTIALS") or None,
        token_inicial=os.getenv("SAC_INITIAL_AUTH_TOKEN") or None,
        app_id=os.getenv("SAC_APP_ID") or None,
        timeout_banco=_ler_numero("SAC_TIMEOUT_BANCO", 15.0),
        nivel_log=nivel_log,
        caminho_log=Path(caminho_log) if caminho_log else LOG_DB_PADRAO,
        intervalo_atualizacao=_ler_numero("SAC_INTERVALO_ATUALIZACAO", 2.0),
    )
