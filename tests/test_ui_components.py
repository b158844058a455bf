from app.utils.ui_components import Notificacao


def test_notificacao_guarda_uma_mensagem():
    notificacao = Notificacao()
    assert not notificacao.visivel

    notificacao.mostrar("Atendimento registrado com sucesso!")
    notificacao.mostrar("Erro ao carregar benefícios.")

    assert notificacao.visivel
    assert notificacao.mensagem == "Erro ao carregar benefícios."


def test_fechar_e_a_unica_saida():
    notificacao = Notificacao()
    notificacao.mostrar("Por favor, preencha todos os campos.")
    assert notificacao.visivel

    notificacao.fechar()
    assert not notificacao.visivel
    assert notificacao.mensagem is None


def test_mensagem_posterior_a_execucao_e_nova():
    """Mensagem vinda da thread do banco pede uma execucao completa para aparecer."""
    notificacao = Notificacao()
    notificacao.marcar_vista()
    assert not notificacao.nova

    notificacao.mostrar("Erro ao carregar atendimentos.")
    assert notificacao.nova

    notificacao.marcar_vista()
    assert not notificacao.nova
    assert notificacao.visivel


def test_mensagem_fechada_nao_e_nova():
    notificacao = Notificacao()
    notificacao.mostrar("Benefício excluído com sucesso!")
    notificacao.fechar()
    assert not notificacao.nova
