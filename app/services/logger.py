import logging
import sqlite3
import time
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

DB_PATH = Path(__file__).parent.parent.parent / "database" / "operacoes.db"


def init_logger_table(db_path=DB_PATH):
    try:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS monitoramento_operacoes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                usuario_id TEXT,
                colecao TEXT NOT NULL,
                operacao TEXT NOT NULL CHECK (operacao IN ('ASSINAR', 'CRIAR', 'ATUALIZAR', 'EXCLUIR')),
                documento_id TEXT,
                status TEXT NOT NULL CHECK (status IN ('SUCESSO', 'FALHA', 'VALIDACAO')),
                mensagem_erro TEXT,
                duracao_segundos REAL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_op_status ON monitoramento_operacoes(status)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_op_data ON monitoramento_operacoes(created_at)")

        conn.commit()
        conn.close()
    except Exception as e:
        logger.error("Erro ao inicializar tabela de operações: %s", e)


def carregar_operacoes(db_path=DB_PATH):
    try:
        conn = sqlite3.connect(db_path)
        query = """
            SELECT
                id, usuario_id, colecao, operacao, documento_id,
                status, mensagem_erro, duracao_segundos, created_at
            FROM monitoramento_operacoes
            ORDER BY id DESC
        """
        df = pd.read_sql_query(query, conn)
        conn.close()

        df['created_at'] = pd.to_datetime(df['created_at'])
        return df
    except Exception as e:
        logger.error("Erro ao carregar operações: %s", e)
        return pd.DataFrame()


class LogOperacoes:
    """Registra o resultado de cada operacao de um vinculo no SQLite.

    Falhas de escrita no log nunca chegam a quem chamou.
    """

    def __init__(self, colecao, usuario_id=None, db_path=DB_PATH):
        self.colecao = colecao
        self.usuario_id = usuario_id
        self.db_path = db_path
        self._inicio = None

    def iniciar(self):
        self._inicio = time.monotonic()

    def registrar_sucesso(self, operacao, documento_id=None):
        self._salvar_log_no_banco(operacao, "SUCESSO", documento_id)

    def registrar_erro(self, operacao, erro, documento_id=None):
        mensagem = str(erro.__cause__ or erro)
        self._salvar_log_no_banco(operacao, "FALHA", documento_id, mensagem[0:500])

    def registrar_validacao(self, operacao, campos, documento_id=None):
        self._salvar_log_no_banco(operacao, "VALIDACAO", documento_id, f"Campos vazios: {', '.join(campos)}")

    def _salvar_log_no_banco(self, operacao, status, documento_id=None, mensagem_erro=None):
        duracao = time.monotonic() - self._inicio if self._inicio is not None else 0.0
        self._inicio = None
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO monitoramento_operacoes
                (usuario_id, colecao, operacao, documento_id, status, mensagem_erro, duracao_segundos)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                self.usuario_id,
                self.colecao,
                operacao,
                documento_id,
                status,
                mensagem_erro,
                duracao
            ))
            conn.commit()
            conn.close()
        except Exception as e:
            logger.error("Erro ao salvar log no banco: %s", e)
