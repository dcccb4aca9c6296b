from __future__ import annotations
from pathlib import Path
from aws_cdk import (
    Stack, Duration, CfnOutput,
    aws_bedrock as bedrock,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_apigateway as apigw,
)
from constructs import Construct
from aws_cdk.aws_lambda_python_alpha import BundlingOptions, PythonFunction, PythonLayerVersion

from agents.safety import (
    BLOCKED_INPUT_MESSAGE, BLOCKED_OUTPUT_MESSAGE, GUARDRAIL_DESCRIPTION, content_filters,
)

ROOT = Path(__file__).resolve().parents[2]


class CoreStack(Stack):
    def __init__(self, scope: Construct, _id: str, **kwargs):
        super().__init__(scope, _id, **kwargs)

        guardrail = bedrock.CfnGuardrail(self, "ContentSafety",
            name="dreamlens-content-safety",
            description=GUARDRAIL_DESCRIPTION,
            blocked_input_messaging=BLOCKED_INPUT_MESSAGE,
            blocked_outputs_messaging=BLOCKED_OUTPUT_MESSAGE,
            content_policy_config=bedrock.CfnGuardrail.ContentPolicyConfigProperty(
                filters_config=[
                    bedrock.CfnGuardrail.ContentFilterConfigProperty(
                        type=f["type"],
                        input_strength=f["inputStrength"],
                        output_strength=f["outputStrength"],
                    )
                    for f in content_filters()
                ],
            ))

        role = iam.Role(self, "DreamLensLambdaRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole"),
            ])
        role.add_to_policy(iam.PolicyStatement(actions=[
            "bedrock:InvokeModel", "bedrock:InvokeModelWithResponseStream",
        ], resources=["*"]))
        role.add_to_policy(iam.PolicyStatement(actions=["bedrock:ApplyGuardrail"],
            resources=[guardrail.attr_guardrail_arn]))

        app_layer = PythonLayerVersion(
            self, "AppCommonLayer",
            entry=str(ROOT / "layers" / "app_common"),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_11],
        )

        env = {
            "BEDROCK_TEXT_MODEL_ID": "us.anthropic.claude-sonnet-4-20250514-v1:0",
            "BEDROCK_GUARDRAIL_ID": guardrail.attr_guardrail_id,
            "BEDROCK_GUARDRAIL_VERSION": guardrail.attr_version,
            "LLM_TEMPERATURE": "0.3",
            "LLM_TOP_P": "0.8",
            "LLM_STREAMING": "false",
            "LOG_JSON": "true",
            "STAGE": "dev",
        }

        fn_analyze = PythonFunction(self, "AnalyzeFn",
            entry=str(ROOT), index="lambdas/analyze/index.py", handler="handler",
            bundling=BundlingOptions(asset_excludes=["infra", "tests", "layers", "cdk.out", ".venv"]),
            runtime=_lambda.Runtime.PYTHON_3_11, memory_size=512, timeout=Duration.seconds(30),
            environment=env, role=role, layers=[app_layer])

        api = apigw.RestApi(self, "DreamLensApi",
            rest_api_name="Dream Lens API",
            deploy_options=apigw.StageOptions(stage_name="prod"))

        api.root.add_resource("api").add_resource("analyze").add_method(
            "POST", apigw.LambdaIntegration(fn_analyze))
        CfnOutput(self, "ApiUrl", value=api.url)
        CfnOutput(self, "GuardrailId", value=guardrail.attr_guardrail_id)
