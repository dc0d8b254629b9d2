"""CDK Stack for the Claude agent infrastructure."""

from typing import Optional

from aws_cdk import (
    Stack,
    CfnOutput,
    Tags,
    aws_ecr as ecr,
    aws_lambda as lambda_,
    aws_lambda_event_sources as lambda_event_sources,
    aws_s3 as s3,
    aws_sqs as sqs,
)
from constructs import Construct, IConstruct

from ..common.config import load_config
from ..common.consumer_policy import build_consumer_policy
from ..common.logger import get_logger
from ..common.resource_manager import ResourceManager

logger = get_logger(__name__)

SERVICE_TAG = "ClaudeAgent"

class ClaudeAgentStack(Stack):
    """Stack wiring S3 and SQS input/output channels to a container-image agent function."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        resource_manager: Optional[ResourceManager] = None,
        **kwargs
    ) -> None:
        """Initialize Claude Agent Stack.

        Args:
            scope: CDK Construct scope
            construct_id: Unique identifier for the construct
            resource_manager: Resource manager instance, built from the
                environment when omitted
            **kwargs: Additional arguments passed to Stack

        Raises:
            ValueError: If the image URI is missing or the configuration is invalid
        """
        # Validate before any construct is added to the scope
        if resource_manager is None:
            resource_manager = ResourceManager(load_config())

        super().__init__(scope, construct_id, **kwargs)

        self._resource_manager = resource_manager
        config = resource_manager.config
        stack_name = self.stack_name

        logger.info(
            f"Synthesizing {stack_name}: prefix={config.name_prefix} "
            f"memory={config.memory_size}MB timeout={config.timeout}s "
            f"auto_delete_objects={config.auto_delete_objects}"
        )
        logger.debug(f"Agent image: {resource_manager.image}")

        # S3 buckets
        self.input_bucket = self._create_bucket("InputBucket", "input")
        self.output_bucket = self._create_bucket("OutputBucket", "output")

        # SQS queues
        self.input_queue = sqs.Queue(
            self,
            "InputQueue",
            queue_name=resource_manager.generate_resource_name(stack_name, "input"),
            visibility_timeout=resource_manager.input_queue_visibility_timeout,
            retention_period=resource_manager.queue_retention_period
        )
        self._tag(self.input_queue, "AgentInputQueue")

        self.output_queue = sqs.Queue(
            self,
            "OutputQueue",
            queue_name=resource_manager.generate_resource_name(stack_name, "output"),
            visibility_timeout=resource_manager.output_queue_visibility_timeout,
            retention_period=resource_manager.queue_retention_period
        )
        self._tag(self.output_queue, "AgentOutputQueue")

        # Agent function from the ECR image, resolved in the registry's own
        # account and region when the URI names an ECR registry
        repository_arn = resource_manager.image.repository_arn()
        if repository_arn:
            repository = ecr.Repository.from_repository_attributes(
                self,
                "EcrRepo",
                repository_arn=repository_arn,
                repository_name=resource_manager.image.repository
            )
        else:
            repository = ecr.Repository.from_repository_name(
                self,
                "EcrRepo",
                resource_manager.image.repository
            )

        self.agent_function = lambda_.DockerImageFunction(
            self,
            "AgentFunction",
            function_name=resource_manager.generate_resource_name(stack_name),
            code=lambda_.DockerImageCode.from_ecr(
                repository,
                tag_or_digest=resource_manager.image.tag_or_digest
            ),
            memory_size=config.memory_size,
            timeout=resource_manager.function_timeout,
            environment={
                "INPUT_BUCKET": self.input_bucket.bucket_name,
                "OUTPUT_BUCKET": self.output_bucket.bucket_name,
                "OUTPUT_SQS_QUEUE_URL": self.output_queue.queue_url,
            }
        )
        self._tag(self.agent_function, "AgentFunction")

        self.input_bucket.grant_read(self.agent_function)
        self.output_bucket.grant_write(self.agent_function)
        self.output_queue.grant_send_messages(self.agent_function)

        self.agent_function.add_event_source(
            lambda_event_sources.SqsEventSource(self.input_queue, batch_size=1)
        )

        self.consumer_policy = build_consumer_policy(
            self.input_bucket,
            self.input_queue,
            self.output_bucket,
            self.output_queue
        )

        self._add_stack_outputs()

    def _create_bucket(self, construct_id: str, role: str) -> s3.Bucket:
        """Create a private, versioned, encrypted bucket.

        Args:
            construct_id: Construct ID for the bucket
            role: Role segment of the bucket name ("input" or "output")
        """
        bucket = s3.Bucket(
            self,
            construct_id,
            bucket_name=self._resource_manager.generate_resource_name(self.stack_name, role),
            versioned=True,
            removal_policy=self._resource_manager.removal_policy,
            auto_delete_objects=self._resource_manager.config.auto_delete_objects,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            encryption=s3.BucketEncryption.S3_MANAGED
        )
        self._tag(bucket, f"Agent{role.capitalize()}Bucket")
        return bucket

    def _tag(self, resource: IConstruct, resource_tag: str) -> None:
        Tags.of(resource).add("Environment", self._resource_manager.env_name)
        Tags.of(resource).add("Service", SERVICE_TAG)
        Tags.of(resource).add("Resource", resource_tag)

    def _add_stack_outputs(self) -> None:
        """Add CloudFormation outputs to the stack.

        Output IDs are read by external tooling and must stay stable.
        """
        CfnOutput(
            self,
            "inputBucketName",
            value=self.input_bucket.bucket_name,
            description="Name of the input S3 bucket"
        )

        CfnOutput(
            self,
            "inputQueueUrl",
            value=self.input_queue.queue_url,
            description="URL of the input SQS queue"
        )

        CfnOutput(
            self,
            "outputBucketName",
            value=self.output_bucket.bucket_name,
            description="Name of the output S3 bucket"
        )

        CfnOutput(
            self,
            "outputQueueUrl",
            value=self.output_queue.queue_url,
            description="URL of the output SQS queue"
        )

        CfnOutput(
            self,
            "lambdaFunctionName",
            value=self.agent_function.function_name,
            description="Name of the Lambda function"
        )

        CfnOutput(
            self,
            "awsRegion",
            value=self.region,
            description="AWS region"
        )

        CfnOutput(
            self,
            "iamPolicyClaudeAgentClient",
            value=self.to_json_string(self.consumer_policy.to_json()),
            description="IAM policy document for consumer applications"
        )
