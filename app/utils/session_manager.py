from datetime import datetime, timedelta

import extra_streamlit_components as stx
import streamlit as st

COOKIE_SESSAO = "sac_refresh_token"
DIAS_SESSAO = 30

ABAS = {
    "inicio": "Início",
    "atendimentos": "Atendimentos",
    "beneficios": "Benefícios",
    "relatorios": "Relatórios",
}
ABA_PADRAO = "inicio"
ABAS_COM_DADOS = ("atendimentos", "beneficios")


def chave_vinculo(aba):
    return f"vinculo_{aba}"


def aba_ativa(estado):
    return estado.get("aba_ativa", ABA_PADRAO)


def encerrar_vinculo(estado, aba):
    vinculo = estado.get(chave_vinculo(aba))
    if vinculo is not None:
        vinculo.encerrar()
        del estado[chave_vinculo(aba)]


def trocar_aba(estado, nova_aba):
    if nova_aba not in ABAS:
        raise ValueError(f"Aba desconhecida: {nova_aba}")

    anterior = aba_ativa(estado)
    if anterior != nova_aba and anterior in ABAS_COM_DADOS:
        encerrar_vinculo(estado, anterior)
    estado["aba_ativa"] = nova_aba


def obter_vinculo(estado, aba, usuario_id, criar):
    """Retorna o vinculo da aba, criando e assinando na primeira vez.

    Se o usuario mudou, o vinculo antigo e encerrado antes de abrir outro.
    """
    chave = chave_vinculo(aba)
    vinculo = estado.get(chave)
    if vinculo is not None and vinculo.usuario_id != usuario_id:
        encerrar_vinculo(estado, aba)
        vinculo = None
    if vinculo is None:
        vinculo = criar()
        vinculo.assinar()
        estado[chave] = vinculo
    return vinculo


def pode_exibir_dados(auth):
    return auth is not None and not auth.carregando and auth.usuario_id is not None


class CredencialCookie:
    """Refresh token da sessao guardado em cookie do navegador.

    A leitura usa os cookies enviados na abertura da sessao, disponiveis ja na
    primeira execucao; a escrita passa pelo CookieManager, que roda no navegador.
    """

    def __init__(self, gerenciador, cookies):
        self._gerenciador = gerenciador
        self._cookies = cookies

    def ler(self):
        return self._cookies.get(COOKIE_SESSAO)

    def gravar(self, valor):
        self._gerenciador.set(
            COOKIE_SESSAO,
            valor,
            expires_at=datetime.now() + timedelta(days=DIAS_SESSAO),
            key="sac_cookie_gravar"
        )

    def apagar(self):
        if self.ler() is not None:
            self._gerenciador.delete(COOKIE_SESSAO, key="sac_cookie_apagar")


def credencial_do_navegador():
    if "gerenciador_cookies" not in st.session_state:
        st.session_state["gerenciador_cookies"] = stx.CookieManager(key="sac_cookies")
    return CredencialCookie(st.session_state["gerenciador_cookies"], st.context.cookies)
