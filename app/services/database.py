import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from app.services.auth_manager import ProvedorIdentidadeFirebase, ProvedorIdentidadeLocal
from app.services.banco_memoria import Assinatura, BancoMemoria
from app.services.configuracao import Configuracao
from app.services.erros import ErroConfiguracao, ErroEscritaBanco, ErroLeituraBanco

logger = logging.getLogger(__name__)


def caminho_colecao(usuario_id: str, colecao: str, app_id: Optional[str] = None) -> str:
    caminho = f"users/{usuario_id}/{colecao}"
    if app_id:
        caminho = f"artifacts/{app_id}/{caminho}"
    return caminho


class BancoFirestore:
    def __init__(self, config: Configuracao):
        self.timeout = config.timeout_banco
        try:
            if not firebase_admin._apps:
                if config.caminho_credenciais:
                    cert = credentials.Certificate(config.caminho_credenciais)
                else:
                    cert = credentials.ApplicationDefault()
                firebase_admin.initialize_app(cert, {"projectId": config.project_id})
            self.db = firestore.client()
        except Exception as e:
            logger.exception("Erro ao inicializar Firestore")
            raise ErroConfiguracao() from e
        logger.info("Firestore inicializado para o projeto %s", config.project_id)

    def assinar(self, caminho: str, ao_receber: Callable[[List[dict]], None], ao_falhar: Callable[[Exception], None] = None) -> Assinatura:
        def on_snapshot(docs, changes, read_time):
            try:
                ao_receber([{"id": doc.id, **(doc.to_dict() or {})} for doc in docs])
            except Exception as e:
                logger.exception("Erro ao processar snapshot de '%s'", caminho)
                if ao_falhar:
                    ao_falhar(e)

        try:
            watch = self.db.collection(caminho).on_snapshot(on_snapshot)
        except Exception as e:
            raise ErroLeituraBanco() from e

        # o Watch encerra o stream em segundo plano quando falha de vez, sem chamar on_snapshot
        return Assinatura(watch.unsubscribe, lambda: watch.is_active)

    def adicionar(self, caminho: str, dados: dict) -> str:
        try:
            _, doc_ref = self.db.collection(caminho).add(dados, retry=None, timeout=self.timeout)
        except Exception as e:
            raise ErroEscritaBanco() from e
        return doc_ref.id

    def atualizar(self, caminho: str, doc_id: str, dados: dict):
        try:
            self.db.collection(caminho).document(doc_id).update(dados, retry=None, timeout=self.timeout)
        except Exception as e:
            raise ErroEscritaBanco() from e

    def excluir(self, caminho: str, doc_id: str):
        try:
            self.db.collection(caminho).document(doc_id).delete(retry=None, timeout=self.timeout)
        except Exception as e:
            raise ErroEscritaBanco() from e


@dataclass
class ContextoApp:
    banco: object
    identidade: object
    config: Configuracao

    def caminho(self, usuario_id: str, colecao: str) -> str:
        return caminho_colecao(usuario_id, colecao, self.config.app_id)


def criar_contexto(config: Configuracao) -> ContextoApp:
    if config.usa_firebase:
        banco = BancoFirestore(config)
        identidade = ProvedorIdentidadeFirebase(config.api_key, timeout=config.timeout_banco)
    else:
        logger.warning("FIREBASE_CONFIG ausente; usando armazenamento local em memória")
        banco = BancoMemoria()
        identidade = ProvedorIdentidadeLocal()

    return ContextoApp(banco=banco, identidade=identidade, config=config)
