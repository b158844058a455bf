"""
Vinculo entre uma colecao do banco de documentos e a tela que a exibe.

Cada tela de dados (atendimentos, beneficios) possui um VinculoColecao:
ele mantem a assinatura em tempo real, o espelho local da colecao e o
estado do formulario (criacao, edicao e confirmacao de exclusao). As
escritas vao sempre para o banco; o espelho so muda quando o banco entrega
um novo snapshot.
"""

import logging
import threading
import weakref
from dataclasses import dataclass
from typing import Callable, Optional

from app.services.erros import ErroEscritaBanco, ErroLeituraBanco, ErroValidacao
from app.services.logger import LogOperacoes
from app.utils.data_handler import agora_iso
from src.validation import STATUS_BENEFICIO, STATUS_PADRAO, exigir_formulario_valido, normalizar_status

logger = logging.getLogger(__name__)

OCIOSO = "OCIOSO"
CRIANDO = "CRIANDO"
EDITANDO = "EDITANDO"


@dataclass(frozen=True)
class CampoFormulario:
    nome: str
    rotulo: str
    obrigatorio: bool = True
    multilinha: bool = False
    opcoes: tuple = ()
    padrao: str = ""


@dataclass(frozen=True)
class TipoRegistro:
    colecao: str
    singular: str
    plural: str
    campos: tuple
    campo_criacao: str
    rotulo_criacao: str
    mensagem_validacao: str
    com_status: bool = False

    @property
    def rotulo(self):
        return self.singular[0].upper() + self.singular[1:]

    @property
    def obrigatorios(self):
        return [campo.nome for campo in self.campos if campo.obrigatorio]

    def formulario_vazio(self):
        return {campo.nome: campo.padrao for campo in self.campos}


ATENDIMENTOS = TipoRegistro(
    colecao="atendimentos",
    singular="atendimento",
    plural="atendimentos",
    campos=(
        CampoFormulario("nomeCidadao", "Nome do Cidadão"),
        CampoFormulario("descricao", "Descrição do Atendimento", multilinha=True),
    ),
    campo_criacao="dataRegistro",
    rotulo_criacao="Data de Registro",
    mensagem_validacao="Por favor, preencha todos os campos.",
)

BENEFICIOS = TipoRegistro(
    colecao="beneficios",
    singular="benefício",
    plural="benefícios",
    campos=(
        CampoFormulario("nomeCidadao", "Nome do Cidadão"),
        CampoFormulario("tipoBeneficio", "Tipo de Benefício"),
        CampoFormulario("statusBeneficio", "Status", obrigatorio=False, opcoes=tuple(STATUS_BENEFICIO), padrao=STATUS_PADRAO),
    ),
    campo_criacao="dataConcessao",
    rotulo_criacao="Data de Concessão",
    mensagem_validacao="Por favor, preencha todos os campos obrigatórios.",
    com_status=True,
)


def _limpar(valor):
    if isinstance(valor, str):
        return valor.strip()
    return valor


class VinculoColecao:
    def __init__(self, contexto, usuario_id: str, tipo: TipoRegistro, notificar: Callable[[str], None],
                 log: Optional[LogOperacoes] = None, relogio: Callable[[], str] = agora_iso):
        self.banco = contexto.banco
        self.caminho = contexto.caminho(usuario_id, tipo.colecao)
        self.usuario_id = usuario_id
        self.tipo = tipo
        self._notificar = notificar
        self._relogio = relogio
        self.log = log or LogOperacoes(tipo.colecao, usuario_id, db_path=contexto.config.caminho_log)

        self._lock = threading.Lock()
        self._espelho = []
        self._assinatura = None
        self._finalizador = None
        self._geracao = 0
        self.versao = 0
        self.carregando = True

        self.formulario = tipo.formulario_vazio()
        self.editando_id = None
        self.exclusao_pendente = None

    @property
    def espelho(self):
        with self._lock:
            return list(self._espelho)

    @property
    def ativo(self):
        with self._lock:
            return self._assinatura is not None

    @property
    def estado(self):
        if self.editando_id is not None:
            return EDITANDO
        if self.formulario != self.tipo.formulario_vazio():
            return CRIANDO
        return OCIOSO

    # ------------------------------------------------------------------
    # Assinatura em tempo real
    # ------------------------------------------------------------------

    def assinar(self):
        with self._lock:
            anterior = self._assinatura
            self._assinatura = None
            self._geracao += 1
            geracao = self._geracao
            self.carregando = True

        if anterior is not None:
            self._descartar(anterior)

        # o banco guarda so uma referencia fraca: sessao descartada libera o vinculo
        ref = weakref.ref(self)

        def ao_receber(docs):
            vinculo = ref()
            if vinculo is not None:
                vinculo._aplicar_snapshot(geracao, docs)

        def ao_falhar(erro):
            vinculo = ref()
            if vinculo is not None:
                vinculo._falha_assinatura(geracao, erro)

        self.log.iniciar()
        try:
            assinatura = self.banco.assinar(self.caminho, ao_receber, ao_falhar)
        except ErroLeituraBanco as e:
            self._falha_assinatura(geracao, e)
            return

        with self._lock:
            obsoleta = geracao != self._geracao
            if not obsoleta:
                self._assinatura = assinatura

        if obsoleta:
            assinatura.cancelar()
            return

        self._finalizador = weakref.finalize(self, assinatura.cancelar)
        self.log.registrar_sucesso("ASSINAR")
        logger.debug("Assinatura aberta em %s", self.caminho)

    def encerrar(self):
        with self._lock:
            self._geracao += 1
            assinatura = self._assinatura
            self._assinatura = None

        if assinatura is not None:
            self._descartar(assinatura)
            logger.debug("Assinatura encerrada em %s", self.caminho)

    def _descartar(self, assinatura):
        if self._finalizador is not None:
            self._finalizador.detach()
            self._finalizador = None
        assinatura.cancelar()

    def verificar_assinatura(self):
        """Reporta uma unica vez a assinatura cujo stream caiu; True se caiu."""
        with self._lock:
            assinatura = self._assinatura
            if assinatura is None or assinatura.viva:
                return False
            self._assinatura = None
            geracao = self._geracao

        self._descartar(assinatura)
        self._falha_assinatura(geracao, ErroLeituraBanco(f"Stream de {self.caminho} encerrado"))
        return True

    def _aplicar_snapshot(self, geracao, docs):
        with self._lock:
            if geracao != self._geracao:
                return
            self._espelho = list(docs)
            self.carregando = False
            self.versao += 1

    def _falha_assinatura(self, geracao, erro):
        with self._lock:
            if geracao != self._geracao:
                return
            self.carregando = False

        logger.error("Erro ao buscar %s: %s", self.tipo.plural, getattr(erro, "__cause__", None) or erro)
        self.log.registrar_erro("ASSINAR", erro)
        self._notificar(f"Erro ao carregar {self.tipo.plural}.")

    # ------------------------------------------------------------------
    # Formulario
    # ------------------------------------------------------------------

    def preencher(self, campo, valor):
        if campo not in self.formulario:
            raise KeyError(f"Campo desconhecido para {self.tipo.plural}: {campo}")
        self.formulario[campo] = valor

    def iniciar_edicao(self, registro: dict):
        formulario = {}
        for campo in self.tipo.campos:
            valor = registro.get(campo.nome, campo.padrao)
            if campo.nome == "statusBeneficio":
                valor = normalizar_status(valor)
            formulario[campo.nome] = valor if valor is not None else campo.padrao

        self.formulario = formulario
        self.editando_id = registro["id"]

    def cancelar_edicao(self):
        self.editando_id = None
        self.formulario = self.tipo.formulario_vazio()

    def enviar(self):
        """Cria ou atualiza, conforme o modo; retorna True se gravou."""
        editando_id = self.editando_id
        operacao = "ATUALIZAR" if editando_id else "CRIAR"
        dados = {campo.nome: _limpar(self.formulario.get(campo.nome)) for campo in self.tipo.campos}

        try:
            exigir_formulario_valido(dados, self.tipo.obrigatorios, self.tipo.mensagem_validacao, com_status=self.tipo.com_status)
        except ErroValidacao as e:
            self.log.registrar_validacao(operacao, e.campos, editando_id)
            self._notificar(e.mensagem)
            return False

        self.log.iniciar()
        try:
            if editando_id:
                dados["dataAtualizacao"] = self._relogio()
                self.banco.atualizar(self.caminho, editando_id, dados)
                doc_id = editando_id
                mensagem = f"{self.tipo.rotulo} atualizado com sucesso!"
            else:
                dados[self.tipo.campo_criacao] = self._relogio()
                doc_id = self.banco.adicionar(self.caminho, dados)
                mensagem = f"{self.tipo.rotulo} registrado com sucesso!"
        except ErroEscritaBanco as e:
            logger.error("Erro ao adicionar/atualizar %s: %s", self.tipo.singular, e.__cause__ or e)
            self.log.registrar_erro(operacao, e, editando_id)
            self._notificar(f"Erro ao salvar {self.tipo.singular}. Por favor, tente novamente.")
            return False

        self.log.registrar_sucesso(operacao, doc_id)
        self.editando_id = None
        self.formulario = self.tipo.formulario_vazio()
        self._notificar(mensagem)
        return True

    # ------------------------------------------------------------------
    # Exclusao em duas etapas
    # ------------------------------------------------------------------

    @property
    def mensagem_confirmacao(self):
        return f"Tem certeza que deseja excluir este {self.tipo.singular}?"

    def solicitar_exclusao(self, doc_id: str):
        self.exclusao_pendente = doc_id

    def cancelar_exclusao(self):
        self.exclusao_pendente = None

    def confirmar_exclusao(self):
        doc_id = self.exclusao_pendente
        if doc_id is None:
            return False
        self.exclusao_pendente = None

        self.log.iniciar()
        try:
            self.banco.excluir(self.caminho, doc_id)
        except ErroEscritaBanco as e:
            logger.error("Erro ao excluir %s: %s", self.tipo.singular, e.__cause__ or e)
            self.log.registrar_erro("EXCLUIR", e, doc_id)
            self._notificar(f"Erro ao excluir {self.tipo.singular}. Por favor, tente novamente.")
            return False

        self.log.registrar_sucesso("EXCLUIR", doc_id)
        if self.editando_id == doc_id:
            self.cancelar_edicao()
        self._notificar(f"{self.tipo.rotulo} excluído com sucesso!")
        return True
