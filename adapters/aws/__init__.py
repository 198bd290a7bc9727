from adapters.aws.bedrock_provider import BedrockProvider
from adapters.aws.dynamodb_conversation_store import DynamoDBConversationCache

__all__ = [
    "BedrockProvider",
    "DynamoDBConversationCache",
]
