import base64
import json
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from app.services.erros import ErroAutenticacao, ErroConfiguracao

logger = logging.getLogger(__name__)

URL_IDENTITY_TOOLKIT = "https://identitytoolkit.googleapis.com/v1"
URL_SECURE_TOKEN = "https://securetoken.googleapis.com/v1/token"


@dataclass(frozen=True)
class Identidade:
    uid: str
    anonimo: bool = True
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None


class SessaoIdentidade:
    """Estado de autenticacao de uma sessao do navegador."""

    def __init__(self, usuario: Optional[Identidade] = None):
        self.usuario = usuario
        self._listeners = []

    def ao_mudar_estado(self, listener: Callable[[Optional[Identidade]], None]):
        self._listeners.append(listener)

        def remover():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return remover

    def definir_usuario(self, usuario: Optional[Identidade]):
        self.usuario = usuario
        for listener in list(self._listeners):
            listener(usuario)


class ProvedorIdentidade:
    def nova_sessao(self) -> SessaoIdentidade:
        return SessaoIdentidade()

    def entrar_anonimamente(self, sessao: SessaoIdentidade) -> Identidade:
        usuario = self._criar_anonimo()
        sessao.definir_usuario(usuario)
        return usuario

    def entrar_com_token(self, sessao: SessaoIdentidade, token: str) -> Identidade:
        usuario = self._trocar_token(token)
        sessao.definir_usuario(usuario)
        return usuario

    def retomar_sessao(self, sessao: SessaoIdentidade, refresh_token: str) -> Identidade:
        """Recupera a identidade de uma sessao anterior a partir do refresh token."""
        usuario = self._renovar(refresh_token)
        sessao.definir_usuario(usuario)
        return usuario

    def sair(self, sessao: SessaoIdentidade):
        sessao.definir_usuario(None)

    def _criar_anonimo(self) -> Identidade:
        raise NotImplementedError

    def _trocar_token(self, token: str) -> Identidade:
        raise NotImplementedError

    def _renovar(self, refresh_token: str) -> Identidade:
        raise NotImplementedError


def _metodo_de_login(id_token):
    # le a claim sem validar a assinatura do JWT
    try:
        carga = id_token.split(".")[1]
        carga += "=" * (-len(carga) % 4)
        claims = json.loads(base64.urlsafe_b64decode(carga))
    except (AttributeError, IndexError, TypeError, ValueError):
        return None
    return (claims.get("firebase") or {}).get("sign_in_provider")


class ProvedorIdentidadeFirebase(ProvedorIdentidade):
    """Firebase Authentication via API REST (Identity Toolkit e Secure Token)."""

    def __init__(self, api_key: str, timeout: float = 15.0, http=None):
        if not api_key:
            raise ErroConfiguracao("apiKey do Firebase não informada")
        self.api_key = api_key
        self.timeout = timeout
        self.http = http or requests.Session()

    def _requisitar(self, url, rotulo, **corpo):
        try:
            resposta = self.http.post(url, params={"key": self.api_key}, timeout=self.timeout, **corpo)
        except requests.RequestException as e:
            raise ErroAutenticacao() from e

        if resposta.status_code != 200:
            try:
                motivo = resposta.json().get("error", {}).get("message", resposta.text)
            except ValueError:
                motivo = resposta.text
            logger.warning("%s retornou %s: %s", rotulo, resposta.status_code, motivo)
            raise ErroAutenticacao()

        return resposta.json()

    def _post(self, endpoint, corpo):
        return self._requisitar(f"{URL_IDENTITY_TOOLKIT}/accounts:{endpoint}", f"Identity Toolkit {endpoint}", json=corpo)

    def _criar_anonimo(self):
        dados = self._post("signUp", {"returnSecureToken": True})
        if not dados.get("localId"):
            raise ErroAutenticacao()
        return Identidade(
            uid=dados["localId"],
            anonimo=True,
            id_token=dados.get("idToken"),
            refresh_token=dados.get("refreshToken")
        )

    def _trocar_token(self, token):
        dados = self._post("signInWithCustomToken", {"token": token, "returnSecureToken": True})
        id_token = dados.get("idToken")
        if not id_token:
            raise ErroAutenticacao()

        # signInWithCustomToken nao devolve o uid; o lookup resolve a partir do idToken
        conta = self._post("lookup", {"idToken": id_token})
        usuarios = conta.get("users") or []
        if not usuarios:
            raise ErroAutenticacao()

        return Identidade(
            uid=usuarios[0]["localId"],
            anonimo=False,
            id_token=id_token,
            refresh_token=dados.get("refreshToken")
        )

    def _renovar(self, refresh_token):
        dados = self._requisitar(
            URL_SECURE_TOKEN,
            "Secure Token",
            data={"grant_type": "refresh_token", "refresh_token": refresh_token}
        )
        if not dados.get("user_id") or not dados.get("id_token"):
            raise ErroAutenticacao()

        return Identidade(
            uid=dados["user_id"],
            anonimo=_metodo_de_login(dados["id_token"]) != "custom",
            id_token=dados["id_token"],
            refresh_token=dados.get("refresh_token") or refresh_token
        )


class ProvedorIdentidadeLocal(ProvedorIdentidade):
    """Identidades anonimas geradas localmente; nao aceita tokens.

    Os refresh tokens emitidos valem enquanto o processo do servidor viver,
    o mesmo tempo de vida do banco em memoria.
    """

    def __init__(self):
        self._renovacoes = {}

    def _criar_anonimo(self):
        usuario = Identidade(uid=uuid.uuid4().hex[:28], anonimo=True, refresh_token=uuid.uuid4().hex)
        self._renovacoes[usuario.refresh_token] = usuario.uid
        return usuario

    def _trocar_token(self, token):
        logger.warning("Token inicial ignorado: o backend local não valida tokens")
        raise ErroAutenticacao()

    def _renovar(self, refresh_token):
        uid = self._renovacoes.get(refresh_token)
        if uid is None:
            raise ErroAutenticacao()
        return Identidade(uid=uid, anonimo=True, refresh_token=refresh_token)


class CredencialMemoria:
    """Guarda o refresh token da sessao fora do navegador."""

    def __init__(self, valor: Optional[str] = None):
        self.valor = valor

    def ler(self):
        return self.valor

    def gravar(self, valor):
        self.valor = valor

    def apagar(self):
        self.valor = None


class AuthManager:
    """Inicializacao da sessao: conecta, autentica uma unica vez e expoe o uid.

    A identidade sobrevive ao recarregamento da pagina pelo refresh token
    guardado na credencial; so sem ela (ou com ela expirada) o login com
    token ou anonimo e refeito.
    """

    def __init__(self, obter_contexto, notificar, sessao: SessaoIdentidade = None, credencial=None):
        self._obter_contexto = obter_contexto
        self._notificar = notificar
        self.credencial = credencial or CredencialMemoria()
        self.contexto = None
        self.sessao = sessao
        self.usuario_id = None
        self.carregando = True
        self.iniciado = False

    def iniciar(self):
        if self.iniciado:
            return
        self.iniciado = True

        try:
            self.contexto = self._obter_contexto()
        except ErroConfiguracao as e:
            logger.error("Erro ao inicializar o aplicativo: %s", e.mensagem)
            self._notificar(ErroConfiguracao.mensagem_usuario)
            self.carregando = False
            return

        provedor = self.contexto.identidade
        if self.sessao is None:
            self.sessao = provedor.nova_sessao()
        self.sessao.ao_mudar_estado(self._ao_mudar_estado)

        if self.sessao.usuario is not None:
            self.usuario_id = self.sessao.usuario.uid
            self.carregando = False
            return

        try:
            if self.retomar(provedor) is None:
                self.autenticar(provedor)
        except ErroAutenticacao:
            logger.error("Falha na autenticação por token e anônima")
            self._notificar(ErroAutenticacao.mensagem_usuario)
        finally:
            self.carregando = False

    def retomar(self, provedor):
        refresh_token = self.credencial.ler()
        if not refresh_token:
            return None
        try:
            return provedor.retomar_sessao(self.sessao, refresh_token)
        except ErroAutenticacao:
            logger.warning("Sessão salva expirada ou revogada; autenticando de novo")
            self.credencial.apagar()
            return None

    def autenticar(self, provedor):
        token = self.contexto.config.token_inicial
        if token:
            try:
                return provedor.entrar_com_token(self.sessao, token)
            except ErroAutenticacao:
                logger.warning("Falha ao entrar com o token inicial; tentando acesso anônimo")

        return provedor.entrar_anonimamente(self.sessao)

    def _ao_mudar_estado(self, usuario):
        self.usuario_id = usuario.uid if usuario else None
        if usuario:
            logger.info("Usuário autenticado: %s (anônimo=%s)", usuario.uid, usuario.anonimo)
            if usuario.refresh_token and usuario.refresh_token != self.credencial.ler():
                self.credencial.gravar(usuario.refresh_token)
        else:
            logger.info("Sessão sem usuário autenticado")
            self.credencial.apagar()
