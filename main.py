from datetime import datetime, timezone

from blobsigner import Credentials, FixedClock, ProviderSignerRegistry, SigningOperation



def main():
    # Example usage of the provider signer registry
    clock = FixedClock(datetime(2008, 6, 5, 16, 38, 19, tzinfo=timezone.utc))
    registry = ProviderSignerRegistry(clock=clock)

    azure_credentials = Credentials(identity="identity", secret="aaaabbbb")
    aws_credentials = Credentials(
        identity="AKIAEXAMPLE",
        secret="wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY",
    )

    azure_get = registry.sign("azureblob", SigningOperation.get("container", "name"), azure_credentials)
    s3_put = registry.sign(
        "s3-v4",
        SigningOperation.put("bucket", "report.txt", payload_length=2, content_type="text/plain"),
        aws_credentials,
        explicit_duration_seconds=60,
    )

    print(f"Azure GET: {azure_get.request_line()}")
    print(f"S3 PUT:    {s3_put.request_line()}")

if __name__ == "__main__":
    main()
