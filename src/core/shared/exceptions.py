"""
Exceções de Domínio do Support Desk.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (entrada inválida, corrigir e reenviar)
    ├── NotFoundError (referência a ticket inexistente)
    └── DecodeError (registro persistido malformado)

Falhas do store (conexão, integridade) NÃO são encapsuladas aqui:
propagam como foram lançadas pelo adapter.
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando dados fornecidos não atendem aos requisitos
    mínimos para processamento. Nunca é reprocessada automaticamente.

    Example:
        if not title.strip():
            raise ValidationError("title cannot be empty", field="title")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class NotFoundError(DomainException):
    """
    Entidade referenciada não existe no store.

    Lançada antes de qualquer escrita começar, portanto nunca
    deixa estado parcial.

    Example:
        ticket = store.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError(
                f"Ticket with ID {ticket_id} not found",
                entity_type="Ticket",
                resource_id=ticket_id,
            )
    """

    def __init__(self, message: str, entity_type: str = None, resource_id: str = None):
        self.entity_type = entity_type
        self.resource_id = resource_id
        super().__init__(message, "NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.resource_id:
            result["resource_id"] = self.resource_id
        return result


class DecodeError(DomainException):
    """
    Registro do store não pôde ser convertido em entidade.

    Lançada pelos decoders do adapter quando uma linha persistida
    tem campo obrigatório ausente ou valor fora do enum.
    """

    def __init__(self, message: str, entity_type: str = None, field: str = None):
        self.entity_type = entity_type
        self.field = field
        super().__init__(message, "DECODE_ERROR")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.field:
            result["field"] = self.field
        return result
