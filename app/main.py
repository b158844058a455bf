import logging
import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.components import atendimentos, beneficios, inicio, relatorios
from app.services.auth_manager import AuthManager
from app.services.configuracao import carregar_configuracao
from app.services.database import criar_contexto
from app.services.logger import init_logger_table
from app.utils.session_manager import ABAS, aba_ativa, credencial_do_navegador, pode_exibir_dados, trocar_aba
from app.utils.ui_components import Notificacao, exibir_carregando, exibir_notificacao, exibir_rodape

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

st.set_page_config(
    page_title="SAC | Sistema de Apoio ao Cidadão",
    layout="wide"
)

st.markdown("""
    <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        .block-container {padding-top: 2rem;}
    </style>
""", unsafe_allow_html=True)


@st.cache_resource(show_spinner=False)
def obter_contexto():
    config = carregar_configuracao()
    logging.getLogger().setLevel(config.nivel_log)
    init_logger_table(config.caminho_log)
    return criar_contexto(config)


if "notificacao" not in st.session_state:
    st.session_state["notificacao"] = Notificacao()
notificacao = st.session_state["notificacao"]
notificacao.marcar_vista()

if "auth" not in st.session_state:
    st.session_state["auth"] = AuthManager(obter_contexto, notificacao.mostrar, credencial=credencial_do_navegador())
auth = st.session_state["auth"]

if auth.carregando:
    tela_carregando = st.empty()
    with tela_carregando.container():
        exibir_carregando()
    auth.iniciar()
    tela_carregando.empty()

atual = aba_ativa(st.session_state)

with st.sidebar:
    st.header("Navegação")

    for aba, rotulo in ABAS.items():
        st.button(
            rotulo,
            key=f"aba_{aba}",
            type="primary" if aba == atual else "secondary",
            on_click=trocar_aba,
            args=(st.session_state, aba),
            use_container_width=True
        )

    st.divider()
    st.caption("Registre atendimentos e benefícios sociais dos cidadãos do município.")

st.title("Sistema de Apoio ao Cidadão (SAC)")
st.divider()

if atual == "inicio":
    inicio.exibir()
elif atual == "atendimentos":
    if pode_exibir_dados(auth):
        atendimentos.exibir(auth, notificacao)
elif atual == "beneficios":
    if pode_exibir_dados(auth):
        beneficios.exibir(auth, notificacao)
elif atual == "relatorios":
    relatorios.exibir()

exibir_rodape(auth.usuario_id)
exibir_notificacao(notificacao)
