"""
Modelos de dados financeiros.
Dataclasses tipadas para entradas, resultados de cálculo e análises salvas.

Os atributos seguem snake_case; `to_dict`/`from_dict` usam as chaves
camelCase do formato persistido.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

# Categorias de débito da análise detalhada (chaves de additionalValues)
DEBIT_CATEGORIES = ("promocoes", "taxasComissoes", "servicosLogisticos", "outrosValores")


# ─── Entrada ───

@dataclass
class FormData:
    """Valores informados pelo restaurante para um período."""
    vbv: float = 0.0                    # Valor Bruto de Vendas
    valores_pagos_cliente: float = 0.0  # pagos pelo cliente e repassados ao iFood
    vrl: float = 0.0                    # Repasse Líquido iFood
    vrlj: float = 0.0                   # Valores Recebidos via Loja
    additional_values: dict[str, float] = field(default_factory=dict)
    periodo: str = ""
    tenant_id: str = ""

    def to_dict(self) -> dict:
        return {
            "vbv": self.vbv,
            "valoresPagosCliente": self.valores_pagos_cliente,
            "vrl": self.vrl,
            "vrlj": self.vrlj,
            "additionalValues": dict(self.additional_values),
            "periodo": self.periodo,
            "tenantId": self.tenant_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FormData":
        return cls(
            vbv=data.get("vbv", 0),
            valores_pagos_cliente=data.get("valoresPagosCliente", 0),
            vrl=data.get("vrl", 0),
            vrlj=data.get("vrlj", 0),
            additional_values=dict(data.get("additionalValues") or {}),
            periodo=data.get("periodo", ""),
            tenant_id=data.get("tenantId", ""),
        )


# ─── Análise detalhada ───

@dataclass
class DebitPercentages:
    """Participação de cada débito sobre a RBR (unidades 0–100)."""
    promocoes: float = 0.0
    taxas_comissoes: float = 0.0
    servicos_logisticos: float = 0.0
    outros_valores: float = 0.0
    total_debitos: float = 0.0

    def to_dict(self) -> dict:
        return {
            "promocoes": self.promocoes,
            "taxasComissoes": self.taxas_comissoes,
            "servicosLogisticos": self.servicos_logisticos,
            "outrosValores": self.outros_valores,
            "totalDebitos": self.total_debitos,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DebitPercentages":
        return cls(
            promocoes=data.get("promocoes", 0),
            taxas_comissoes=data.get("taxasComissoes", 0),
            servicos_logisticos=data.get("servicosLogisticos", 0),
            outros_valores=data.get("outrosValores", 0),
            total_debitos=data.get("totalDebitos", 0),
        )


@dataclass
class DetailedAnalysisData:
    """Detalhamento dos débitos retidos pela plataforma."""
    promocoes: float = 0.0
    taxas_comissoes: float = 0.0
    servicos_logisticos: float = 0.0
    outros_valores: float = 0.0
    debitos_detalhados: float = 0.0
    rbr_pos_debitos: float = 0.0
    repasse_liquido_real: float = 0.0
    percentuais: DebitPercentages = field(default_factory=DebitPercentages)

    def to_dict(self) -> dict:
        return {
            "promocoes": self.promocoes,
            "taxasComissoes": self.taxas_comissoes,
            "servicosLogisticos": self.servicos_logisticos,
            "outrosValores": self.outros_valores,
            "debitosDetalhados": self.debitos_detalhados,
            "rbrPosDebitos": self.rbr_pos_debitos,
            "repasseLiquidoReal": self.repasse_liquido_real,
            "percentuais": self.percentuais.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DetailedAnalysisData":
        return cls(
            promocoes=data.get("promocoes", 0),
            taxas_comissoes=data.get("taxasComissoes", 0),
            servicos_logisticos=data.get("servicosLogisticos", 0),
            outros_valores=data.get("outrosValores", 0),
            debitos_detalhados=data.get("debitosDetalhados", 0),
            rbr_pos_debitos=data.get("rbrPosDebitos", 0),
            repasse_liquido_real=data.get("repasseLiquidoReal", 0),
            percentuais=DebitPercentages.from_dict(data.get("percentuais") or {}),
        )


# ─── Resultado dos cálculos ───

@dataclass
class CalculatedData:
    """KPIs derivados de um FormData."""
    rbr: float = 0.0                        # Receita Bruta Real
    rol: float = 0.0                        # Receita Operacional Líquida
    rentabilidade_liquida: float = 0.0      # ROL / RBR (0–100)
    retencao_ifood_percentual: float = 0.0  # 100 - rentabilidade
    valor_retido_ifood: float = 0.0         # RBR - ROL
    detailed_analysis: Optional[DetailedAnalysisData] = None

    def with_detailed_analysis(self, detail: DetailedAnalysisData) -> "CalculatedData":
        """Cópia com o detalhamento anexado (o original não é alterado)."""
        return replace(self, detailed_analysis=detail)

    def to_dict(self) -> dict:
        data = {
            "rbr": self.rbr,
            "rol": self.rol,
            "rentabilidadeLiquida": self.rentabilidade_liquida,
            "retencaoIfoodPercentual": self.retencao_ifood_percentual,
            "valorRetidoIfood": self.valor_retido_ifood,
        }
        if self.detailed_analysis is not None:
            data["detailedAnalysis"] = self.detailed_analysis.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CalculatedData":
        detail = data.get("detailedAnalysis")
        return cls(
            rbr=data["rbr"],
            rol=data["rol"],
            rentabilidade_liquida=data["rentabilidadeLiquida"],
            retencao_ifood_percentual=data["retencaoIfoodPercentual"],
            valor_retido_ifood=data["valorRetidoIfood"],
            detailed_analysis=DetailedAnalysisData.from_dict(detail) if detail else None,
        )


# ─── Análise salva ───

@dataclass
class AnalysisData:
    """Snapshot salvo de um cálculo (imutável após criado)."""
    id: str
    form_data: FormData
    calculated_data: CalculatedData
    timestamp: str
    user_id: str
    tenant_id: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "formData": self.form_data.to_dict(),
            "calculatedData": self.calculated_data.to_dict(),
            "timestamp": self.timestamp,
            "userId": self.user_id,
            "tenantId": self.tenant_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisData":
        return cls(
            id=data["id"],
            form_data=FormData.from_dict(data["formData"]),
            calculated_data=CalculatedData.from_dict(data["calculatedData"]),
            timestamp=data["timestamp"],
            user_id=data["userId"],
            tenant_id=data["tenantId"],
        )


# ─── Validação ───

@dataclass
class ValidationError:
    """Erro de validação associado a um campo (ou "base")."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Resultado da validação do formulário."""
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ─── Usuário ───

@dataclass
class User:
    """Usuário "logado" (login simulado, sem verificação real)."""
    id: str
    email: str
    name: str
    tenant_id: str
    role: str = "owner"  # owner, manager ou viewer
    created_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "tenantId": self.tenant_id,
            "role": self.role,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data["id"],
            email=data.get("email", ""),
            name=data.get("name", ""),
            tenant_id=data["tenantId"],
            role=data.get("role", "owner"),
            created_at=data.get("createdAt", ""),
        )
