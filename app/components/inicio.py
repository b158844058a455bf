import streamlit as st


def exibir():
    with st.container(border=True):
        st.header("Bem-vindo ao Sistema de Apoio ao Cidadão (SAC)")
        st.markdown(
            "Este aplicativo foi desenvolvido para otimizar a gestão de atendimentos e benefícios sociais, "
            "facilitando o trabalho da equipe social e melhorando a qualidade dos serviços públicos."
        )

        c1, c2, c3 = st.columns(3)
        with c1.container(border=True):
            st.markdown("#### :blue[Gerenciar Atendimentos]")
            st.caption("Registre e acompanhe todos os atendimentos aos cidadãos de forma eficiente.")
        with c2.container(border=True):
            st.markdown("#### :green[Gerenciar Benefícios]")
            st.caption("Conceda e monitore os benefícios sociais com facilidade.")
        with c3.container(border=True):
            st.markdown("#### :violet[Gerar Relatórios]")
            st.caption("Obtenha insights valiosos através de relatórios detalhados (funcionalidade futura).")
