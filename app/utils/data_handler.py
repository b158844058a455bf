from datetime import datetime, timezone

import pandas as pd


CORES_STATUS = {
    "Aprovado": "green",
    "Pendente": "orange",
    "Negado": "red",
}


def agora_iso():
    # mesmo formato de Date.toISOString(): UTC, milissegundos e sufixo Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def ler_data_iso(valor):
    if not valor:
        return None
    try:
        return datetime.fromisoformat(str(valor).replace("Z", "+00:00"))
    except ValueError:
        return None


def formatar_data(valor):
    data = ler_data_iso(valor)
    if data is None:
        return ""
    return data.astimezone().strftime("%d/%m/%Y")


def formatar_status(status):
    cor = CORES_STATUS.get(status, "gray")
    return f":{cor}-background[{status}]"


def espelho_para_dataframe(espelho, tipo):
    """Converte o espelho de uma colecao na tabela exibida pela tela.

    A ordem das linhas e a ordem de entrega do snapshot.
    """
    colunas = {campo.nome: campo.rotulo for campo in tipo.campos}
    colunas[tipo.campo_criacao] = tipo.rotulo_criacao

    if not espelho:
        return pd.DataFrame(columns=["id", *colunas.values()])

    df = pd.DataFrame(espelho)
    for coluna in colunas:
        if coluna not in df.columns:
            df[coluna] = ""

    df[tipo.campo_criacao] = df[tipo.campo_criacao].apply(formatar_data)
    df = df[["id", *colunas.keys()]].rename(columns=colunas)
    return df.fillna("")
