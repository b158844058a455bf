import streamlit as st


def exibir():
    with st.container(border=True):
        st.header(":violet[Gerar Relatórios]")
        st.markdown(
            "Esta seção está em desenvolvimento. Futuramente, você poderá gerar relatórios detalhados "
            "sobre atendimentos e benefícios para obter insights valiosos."
        )
        st.caption("Aguarde por novas atualizações!")
