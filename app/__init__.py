# Sistema de Apoio ao Cidadão (SAC)
#
# Estrutura:
#
# app/
# ├── __init__.py
# ├── main.py          # Ponto de entrada do Streamlit (abas e inicializacao da sessao)
# ├── components/      # Telas: inicio, atendimentos, beneficios, relatorios
# ├── services/        # Banco de documentos, autenticacao, vinculos, log de operacoes
# └── utils/           # Notificacao, navegacao e formatacao de tabelas
#
# Para executar:
#   streamlit run app/main.py
