"""
Fixtures compartilhadas para os testes do SAC.

Os testes usam o banco em memoria e o provedor de identidade local, sem
rede e sem o runtime do Streamlit.
"""

import pytest

from app.services.auth_manager import ProvedorIdentidadeLocal
from app.services.banco_memoria import BancoMemoria
from app.services.colecao import ATENDIMENTOS, BENEFICIOS, VinculoColecao
from app.services.configuracao import Configuracao
from app.services.database import ContextoApp
from app.services.erros import ErroEscritaBanco, ErroLeituraBanco
from app.services.logger import init_logger_table

USUARIO_ID = "usuario-teste"


class BancoInstrumentado(BancoMemoria):
    """Banco em memoria que conta chamadas e pode falhar sob demanda."""

    def __init__(self):
        super().__init__()
        self.chamadas = []
        self.falhar_em = set()

    def assinar(self, caminho, ao_receber, ao_falhar=None):
        self.chamadas.append(("assinar", caminho))
        if "assinar" in self.falhar_em:
            raise ErroLeituraBanco() from RuntimeError("permission-denied")
        return super().assinar(caminho, ao_receber, ao_falhar)

    def adicionar(self, caminho, dados):
        self.chamadas.append(("adicionar", caminho, dict(dados)))
        if "adicionar" in self.falhar_em:
            raise ErroEscritaBanco() from RuntimeError("unavailable")
        return super().adicionar(caminho, dados)

    def atualizar(self, caminho, doc_id, dados):
        self.chamadas.append(("atualizar", caminho, doc_id, dict(dados)))
        if "atualizar" in self.falhar_em:
            raise ErroEscritaBanco() from RuntimeError("unavailable")
        return super().atualizar(caminho, doc_id, dados)

    def excluir(self, caminho, doc_id):
        self.chamadas.append(("excluir", caminho, doc_id))
        if "excluir" in self.falhar_em:
            raise ErroEscritaBanco() from RuntimeError("unavailable")
        return super().excluir(caminho, doc_id)

    def escritas(self):
        return [c for c in self.chamadas if c[0] in ("adicionar", "atualizar", "excluir")]

    def entregar(self, caminho):
        """Forca a entrega de um novo snapshot aos assinantes."""
        self._notificar(caminho)


@pytest.fixture
def config(tmp_path):
    return Configuracao(caminho_log=tmp_path / "operacoes.db")


@pytest.fixture
def log_db(config):
    init_logger_table(config.caminho_log)
    return config.caminho_log


@pytest.fixture
def banco():
    return BancoInstrumentado()


@pytest.fixture
def contexto(banco, config, log_db):
    return ContextoApp(banco=banco, identidade=ProvedorIdentidadeLocal(), config=config)


@pytest.fixture
def notificacoes():
    return []


@pytest.fixture
def vinculo_atendimentos(contexto, notificacoes):
    vinculo = VinculoColecao(contexto, USUARIO_ID, ATENDIMENTOS, notificacoes.append)
    vinculo.assinar()
    yield vinculo
    vinculo.encerrar()


@pytest.fixture
def vinculo_beneficios(contexto, notificacoes):
    vinculo = VinculoColecao(contexto, USUARIO_ID, BENEFICIOS, notificacoes.append)
    vinculo.assinar()
    yield vinculo
    vinculo.encerrar()
