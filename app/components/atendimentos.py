import streamlit as st

from app.components.colecao_view import exibir_colecao
from app.services.colecao import ATENDIMENTOS, VinculoColecao
from app.utils.session_manager import obter_vinculo


def exibir(auth, notificacao):
    usuario_id = auth.usuario_id
    vinculo = obter_vinculo(
        st.session_state,
        "atendimentos",
        usuario_id,
        lambda: VinculoColecao(auth.contexto, usuario_id, ATENDIMENTOS, notificacao.mostrar)
    )
    exibir_colecao(vinculo, ":blue[Gerenciar Atendimentos]", notificacao, auth.contexto.config.intervalo_atualizacao)
