import streamlit as st


class Notificacao:
    """Mensagem unica exibida em um modal ate o usuario fechar.

    A versao muda a cada mensagem; marcar_vista() e chamado no inicio de cada
    execucao completa do app. Mensagens que chegam depois disso (thread do
    banco, execucao so do fragmento) ficam como novas ate a proxima execucao.
    """

    def __init__(self):
        self.mensagem = None
        self.versao = 0
        self._versao_vista = 0

    @property
    def visivel(self):
        return self.mensagem is not None

    @property
    def nova(self):
        return self.visivel and self.versao != self._versao_vista

    def mostrar(self, mensagem):
        self.mensagem = mensagem
        self.versao += 1

    def marcar_vista(self):
        self._versao_vista = self.versao

    def fechar(self):
        self.mensagem = None


@st.dialog("Aviso", dismissible=False)
def _dialogo_notificacao(notificacao):
    st.markdown(notificacao.mensagem)
    if st.button("Fechar", type="primary", use_container_width=True):
        notificacao.fechar()
        st.rerun()


def exibir_notificacao(notificacao):
    if notificacao.visivel:
        _dialogo_notificacao(notificacao)


@st.dialog("Confirmar Exclusão", dismissible=False)
def dialogo_confirmar_exclusao(vinculo):
    st.warning(vinculo.mensagem_confirmacao)
    c1, c2 = st.columns(2)
    if c1.button("Sim, excluir", type="primary", use_container_width=True):
        vinculo.confirmar_exclusao()
        st.rerun()
    if c2.button("Cancelar", use_container_width=True):
        vinculo.cancelar_exclusao()
        st.rerun()


def exibir_carregando():
    st.markdown("""
        <div style="display:flex;align-items:center;justify-content:center;min-height:60vh;">
            <span style="font-size:1.25rem;font-weight:600;color:#374151;">Carregando...</span>
        </div>
    """, unsafe_allow_html=True)


def exibir_rodape(usuario_id):
    st.divider()
    st.caption("Desenvolvido para o Projeto SAC - Gran Faculdade")
    if usuario_id:
        st.caption(f"ID do Usuário: {usuario_id}")
