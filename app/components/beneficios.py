import streamlit as st

from app.components.colecao_view import exibir_colecao
from app.services.colecao import BENEFICIOS, VinculoColecao
from app.utils.session_manager import obter_vinculo


def exibir(auth, notificacao):
    usuario_id = auth.usuario_id
    vinculo = obter_vinculo(
        st.session_state,
        "beneficios",
        usuario_id,
        lambda: VinculoColecao(auth.contexto, usuario_id, BENEFICIOS, notificacao.mostrar)
    )
    exibir_colecao(vinculo, ":green[Gerenciar Benefícios]", notificacao, auth.contexto.config.intervalo_atualizacao)
