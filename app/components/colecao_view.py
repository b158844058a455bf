import streamlit as st

from app.utils.data_handler import espelho_para_dataframe, formatar_status
from app.utils.ui_components import dialogo_confirmar_exclusao

RECARREGAR_APP = "_recarregar_app"


def chave_widget(vinculo, campo):
    return f"{vinculo.tipo.colecao}_{campo}"


def sincronizar_widgets(vinculo):
    for campo, valor in vinculo.formulario.items():
        st.session_state[chave_widget(vinculo, campo)] = valor


def _ao_enviar(vinculo):
    for campo in vinculo.tipo.campos:
        vinculo.preencher(campo.nome, st.session_state.get(chave_widget(vinculo, campo.nome), campo.padrao))
    vinculo.enviar()
    sincronizar_widgets(vinculo)


def _ao_cancelar_edicao(vinculo):
    vinculo.cancelar_edicao()
    sincronizar_widgets(vinculo)


def _ao_editar(vinculo, registro):
    vinculo.iniciar_edicao(registro)
    sincronizar_widgets(vinculo)
    st.session_state[RECARREGAR_APP] = True


def _ao_excluir(vinculo, doc_id):
    vinculo.solicitar_exclusao(doc_id)
    st.session_state[RECARREGAR_APP] = True


def exibir_formulario(vinculo):
    tipo = vinculo.tipo

    for campo in tipo.campos:
        chave = chave_widget(vinculo, campo.nome)
        if chave not in st.session_state:
            st.session_state[chave] = vinculo.formulario.get(campo.nome, campo.padrao)

    with st.form(f"form_{tipo.colecao}", border=True):
        for campo in tipo.campos:
            chave = chave_widget(vinculo, campo.nome)
            if campo.opcoes:
                st.selectbox(f"{campo.rotulo}:", options=list(campo.opcoes), key=chave)
            elif campo.multilinha:
                st.text_area(f"{campo.rotulo}:", key=chave, height=100)
            else:
                st.text_input(f"{campo.rotulo}:", key=chave)

        editando = vinculo.editando_id is not None
        acao = "Atualizar" if editando else "Registrar"

        c1, c2, _ = st.columns([1, 1, 2])
        c1.form_submit_button(
            f"{acao} {tipo.rotulo}",
            type="primary",
            on_click=_ao_enviar,
            args=(vinculo,),
            use_container_width=True
        )
        if editando:
            c2.form_submit_button(
                "Cancelar Edição",
                on_click=_ao_cancelar_edicao,
                args=(vinculo,),
                use_container_width=True
            )


def _tabela_registros(vinculo, notificacao):
    vinculo.verificar_assinatura()

    # o modal de aviso so e desenhado na execucao completa do app
    if st.session_state.pop(RECARREGAR_APP, False) or notificacao.nova:
        st.rerun()

    tipo = vinculo.tipo
    espelho = vinculo.espelho

    if vinculo.carregando:
        st.caption(f"Carregando {tipo.plural}...")
        return
    if not espelho:
        st.caption(f"Nenhum {tipo.singular} registrado ainda.")
        return

    df = espelho_para_dataframe(espelho, tipo)
    colunas_dados = [coluna for coluna in df.columns if coluna != "id"]
    larguras = [2] * len(colunas_dados) + [1]

    with st.container(border=True):
        cabecalho = st.columns(larguras)
        for col, nome in zip(cabecalho, colunas_dados + ["Ações"]):
            col.markdown(f"**{nome}**")

        st.divider()

        for idx, (registro, (_, linha)) in enumerate(zip(espelho, df.iterrows())):
            cols = st.columns(larguras, vertical_alignment="center")
            for col, nome in zip(cols, colunas_dados):
                if nome == "Status":
                    col.markdown(formatar_status(linha[nome]))
                else:
                    col.markdown(str(linha[nome]))

            with cols[-1].popover("Opções"):
                st.button("Editar", key=f"btn_edit_{tipo.colecao}_{registro['id']}",
                          on_click=_ao_editar, args=(vinculo, registro), use_container_width=True)
                st.button("Excluir", key=f"btn_rm_{tipo.colecao}_{registro['id']}", type="secondary",
                          on_click=_ao_excluir, args=(vinculo, registro["id"]), use_container_width=True)

            if idx < len(espelho) - 1:
                st.divider()


def exibir_colecao(vinculo, titulo, notificacao, intervalo):
    tipo = vinculo.tipo

    st.subheader(titulo)
    exibir_formulario(vinculo)

    st.markdown("###")
    st.subheader(f"{tipo.plural[0].upper() + tipo.plural[1:]} Registrados")

    # o fragmento redesenha a tabela a partir do espelho, que o banco atualiza em segundo plano
    st.fragment(_tabela_registros, run_every=intervalo)(vinculo, notificacao)

    if vinculo.exclusao_pendente is not None and not notificacao.visivel:
        dialogo_confirmar_exclusao(vinculo)
