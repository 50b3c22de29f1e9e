class TaskflowError(Exception):
    pass


class BusinessError(TaskflowError):
    """业务规则校验失败, message 直接展示给用户"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
