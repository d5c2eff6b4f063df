"""
Módulo Principal da Aplicação (Application Factory)
"""

import os

from flask import Flask, render_template
from werkzeug.middleware.proxy_fix import ProxyFix
from config import Config

from .core import database
from .core.extensions import csrf, limiter
from .core.logger import configurar_logging, get_logger
from .core.mirror import ArmazemLocal
from .notifications import EXTENSAO as EXTENSAO_NOTIFICADOR
from .notifications.dispatcher import Notificador
from .notifications.settings import RepositorioDefinicoesLocal
from .notifications.transport import TransporteEdgeFunction

logger = get_logger(__name__)


def create_app(config_class=Config, supabase_client=None, transporte=None):
    """
    Cria e configura uma instância da aplicação Flask.

    'supabase_client' e 'transporte' permitem injetar dependências (testes).
    """
    
    app = Flask(__name__, 
                instance_relative_config=True,
                static_folder='static',
                template_folder='templates')

    # Ajusta o Flask para entender que está atrás de um Proxy
    # Isso garante que ele gere URLs com 'https://' em vez de 'http://'
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Carrega a configuração
    app.config.from_object(config_class)
    configurar_logging(app)

    # 2. Extensões e cliente Supabase
    csrf.init_app(app)
    limiter.init_app(app)
    database.init_app(app, supabase_client)

    # 3. Armazém local + Notificador (injetado nos Blueprints via app.extensions)
    caminho = app.config['LOCAL_STORE_PATH']
    if not os.path.isabs(caminho):
        caminho = os.path.join(app.instance_path, caminho)
    armazem = ArmazemLocal(caminho)
    app.extensions['armazem_local'] = armazem

    if transporte is None:
        transporte = TransporteEdgeFunction(database.get_client_de(app), app.config['EMAIL_FUNCTION_NAME'])
    app.extensions[EXTENSAO_NOTIFICADOR] = Notificador(
        RepositorioDefinicoesLocal(armazem),
        transporte,
        url_sistema=app.config['APP_BASE_URL'],
    )

    # 4. Configura os Blueprints (Módulos)
    from .auth import auth_bp
    app.register_blueprint(auth_bp, url_prefix='/')

    from .dashboard import dashboard_bp
    app.register_blueprint(dashboard_bp)

    from .professores import professores_bp
    app.register_blueprint(professores_bp)

    from .turmas import turmas_bp
    app.register_blueprint(turmas_bp)

    from .contactos import contactos_bp
    app.register_blueprint(contactos_bp)

    from .configuracoes import configuracoes_bp
    app.register_blueprint(configuracoes_bp)

    # 5. Páginas de erro
    @app.errorhandler(404)
    def pagina_nao_encontrada(e):
        return render_template('404.html'), 404

    # 6. Rota de Health Check
    @app.route("/health")
    def health_check():
        return "Servidor EduManager no ar!", 200

    logger.info("Aplicação EduManager criada.")
    return app
