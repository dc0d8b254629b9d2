"""IAM policy document for applications consuming the agent."""

from aws_cdk import (
    aws_iam as iam,
    aws_s3 as s3,
    aws_sqs as sqs,
)

def build_consumer_policy(
    input_bucket: s3.IBucket,
    input_queue: sqs.IQueue,
    output_bucket: s3.IBucket,
    output_queue: sqs.IQueue
) -> iam.PolicyDocument:
    """Build the minimal policy a client needs to submit work and collect results.

    Args:
        input_bucket: Bucket the client uploads files to
        input_queue: Queue the client sends processing requests to
        output_bucket: Bucket the client downloads results from
        output_queue: Queue the client receives status updates from

    Returns:
        PolicyDocument with one Allow statement per grant
    """
    return iam.PolicyDocument(
        statements=[
            # Upload files for processing
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["s3:PutObject"],
                resources=[f"{input_bucket.bucket_arn}/*"]
            ),
            # Trigger processing
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["sqs:SendMessage"],
                resources=[input_queue.queue_arn]
            ),
            # Download results
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["s3:GetObject"],
                resources=[f"{output_bucket.bucket_arn}/*"]
            ),
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=["s3:ListBucket"],
                resources=[output_bucket.bucket_arn]
            ),
            # Status updates
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW,
                actions=[
                    "sqs:ReceiveMessage",
                    "sqs:DeleteMessage",
                    "sqs:GetQueueAttributes"
                ],
                resources=[output_queue.queue_arn]
            )
        ]
    )
