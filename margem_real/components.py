"""
Componentes HTML reutilizáveis para a interface.
Retornam strings HTML para uso com st.markdown(html, unsafe_allow_html=True).
"""

from html import escape

from margem_real.config import APP_NAME, APP_VERSION


def app_header(user_name: str, role_label: str, version: str = APP_VERSION) -> str:
    """Header principal com o usuário logado."""
    return f"""
    <div class="app-header">
        <h1>{APP_NAME}</h1>
        <div class="meta">
            <span>{version}</span>
            <span>&middot;</span>
            <span>{escape(user_name)}</span>
            <span class="badge">{escape(role_label)}</span>
        </div>
    </div>
    """


def section_header(title: str, subtitle: str = None) -> str:
    """Header de secao com borda accent."""
    sub_html = f'<div class="sub">{subtitle}</div>' if subtitle else ""
    return f"""
    <div class="section-hdr">
        <h2>{title}</h2>
        {sub_html}
    </div>
    """


def warning_banner(message: str) -> str:
    """Banner de alerta amber."""
    return f'<div class="warn-banner">{message}</div>'


def error_banner(messages: list[str]) -> str:
    """Lista de erros de validação."""
    items = "".join(f"<li>{escape(m)}</li>" for m in messages)
    return f'<div class="error-banner"><ul>{items}</ul></div>'


def result_banner(messages: list[str]) -> str:
    """Mensagens de resumo após o cálculo."""
    return '<div class="result-banner">' + "<br>".join(escape(m) for m in messages) + "</div>"


def footer(version: str = APP_VERSION) -> str:
    """Footer minimalista."""
    return f"""
    <div class="app-footer">
        {APP_NAME} {version} &middot; Análise financeira para restaurantes parceiros
        &middot; Dados salvos apenas neste dispositivo
    </div>
    """
