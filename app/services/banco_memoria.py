import copy
import threading
import uuid
from collections import OrderedDict

from app.services.erros import ErroEscritaBanco


class Assinatura:
    """Handle de uma assinatura aberta; cancelar() e idempotente."""

    def __init__(self, ao_cancelar, esta_viva=None):
        self._ao_cancelar = ao_cancelar
        self._esta_viva = esta_viva
        self.ativa = True

    @property
    def viva(self):
        """False quando o stream do banco caiu sem que a assinatura fosse cancelada."""
        if not self.ativa:
            return False
        return self._esta_viva is None or bool(self._esta_viva())

    def cancelar(self):
        if not self.ativa:
            return
        self.ativa = False
        self._ao_cancelar()


class BancoMemoria:
    """Armazenamento local usado quando nao ha configuracao do Firebase.

    Mantem o mesmo contrato do Firestore: cada escrita entrega o snapshot
    completo da colecao a todos os assinantes daquele caminho, e uma nova
    assinatura recebe o estado atual imediatamente.
    """

    def __init__(self):
        self._colecoes = {}
        self._assinantes = {}
        self._lock = threading.RLock()

    def _snapshot(self, caminho):
        docs = self._colecoes.get(caminho, OrderedDict())
        return [{"id": doc_id, **copy.deepcopy(dados)} for doc_id, dados in docs.items()]

    def _notificar(self, caminho):
        with self._lock:
            snapshot = self._snapshot(caminho)
            callbacks = list(self._assinantes.get(caminho, {}).values())
        for callback in callbacks:
            callback(copy.deepcopy(snapshot))

    def assinar(self, caminho, ao_receber, ao_falhar=None):
        chave = uuid.uuid4().hex
        with self._lock:
            self._assinantes.setdefault(caminho, {})[chave] = ao_receber
            snapshot = self._snapshot(caminho)

        def cancelar():
            with self._lock:
                self._assinantes.get(caminho, {}).pop(chave, None)

        ao_receber(snapshot)
        return Assinatura(cancelar)

    def adicionar(self, caminho, dados):
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            self._colecoes.setdefault(caminho, OrderedDict())[doc_id] = copy.deepcopy(dados)
        self._notificar(caminho)
        return doc_id

    def atualizar(self, caminho, doc_id, dados):
        with self._lock:
            docs = self._colecoes.get(caminho, {})
            if doc_id not in docs:
                raise ErroEscritaBanco(f"Documento {doc_id} não encontrado")
            docs[doc_id].update(copy.deepcopy(dados))
        self._notificar(caminho)

    def excluir(self, caminho, doc_id):
        # excluir um documento inexistente nao e erro no Firestore
        with self._lock:
            self._colecoes.get(caminho, {}).pop(doc_id, None)
        self._notificar(caminho)

    def total_assinantes(self, caminho):
        with self._lock:
            return len(self._assinantes.get(caminho, {}))
